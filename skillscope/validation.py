"""Validation rules for skill definitions.

The same rule set serves two callers: a SKILL.md already on disk, whose
location is authoritative, and detached editor content that has not been
written to a directory yet. The only difference is whether a name that does
not match the directory name is an error or a warning.
"""

import logging
import re
from pathlib import Path

from skillscope.exceptions import MalformedBundleError
from skillscope.models import ValidationResult
from skillscope.parsing.frontmatter import FrontmatterParser

logger = logging.getLogger(__name__)

NAME_MAX_LENGTH = 64
DESCRIPTION_MAX_LENGTH = 1024
DESCRIPTION_MIN_LENGTH = 20
COMPATIBILITY_MAX_LENGTH = 500
BODY_MAX_LINES = 500
BODY_MAX_TOKENS = 5000

NAME_PATTERN = re.compile(r"[a-z][a-z0-9]*(-[a-z0-9]+)*")


def _validate_name(name: str, result: ValidationResult) -> None:
    if not name:
        result.error("name", "Name is required")
        return

    if len(name) > NAME_MAX_LENGTH:
        result.error("name", f"Name must be <= {NAME_MAX_LENGTH} characters")

    if not NAME_PATTERN.fullmatch(name):
        result.error("name", "Name must be lowercase alphanumeric with single hyphens")

    if "--" in name:
        result.error("name", "Name must not contain consecutive hyphens")


def _validate_description(description: str, result: ValidationResult) -> None:
    if not description:
        result.error("description", "Description is required")
        return

    if len(description) > DESCRIPTION_MAX_LENGTH:
        result.error(
            "description",
            f"Description must be <= {DESCRIPTION_MAX_LENGTH} characters",
        )

    if len(description) < DESCRIPTION_MIN_LENGTH:
        result.warning(
            "description",
            f"Description should be more descriptive (>= {DESCRIPTION_MIN_LENGTH} chars)",
        )


def count_lines(text: str) -> int:
    """Count lines separated by '\\n' only; an unterminated last line counts."""
    if not text:
        return 0
    return text.count("\n") + (0 if text.endswith("\n") else 1)


def _validate_body(body: str, result: ValidationResult) -> None:
    line_count = count_lines(body)
    if line_count > BODY_MAX_LINES:
        result.warning(
            "body",
            f"Body is {line_count} lines (recommended < {BODY_MAX_LINES})",
        )

    token_estimate = len(body) // 4
    if token_estimate > BODY_MAX_TOKENS:
        result.warning(
            "body",
            f"Estimated {token_estimate} tokens (recommended < {BODY_MAX_TOKENS})",
        )


def validate(
    name: str,
    description: str,
    directory_name: str,
    body: str,
    other_fields: dict[str, str] | None = None,
    *,
    directory_authoritative: bool,
) -> ValidationResult:
    """
    Check a skill definition against the naming, description, compatibility
    and body-size rules.

    Args:
        name: Value of the ``name`` field ("" when absent)
        description: Value of the ``description`` field ("" when absent)
        directory_name: Name of the directory holding the SKILL.md
            ("" when unknown)
        body: Markdown body after the frontmatter
        other_fields: Remaining flattened fields; only ``compatibility`` is
            checked
        directory_authoritative: True when the definition was read from disk,
            making a name/directory mismatch an error instead of a warning

    Returns:
        ValidationResult; ``valid`` is True when no errors were found
    """
    other_fields = other_fields or {}
    result = ValidationResult()

    _validate_name(name, result)

    if directory_name and name and name != directory_name:
        if directory_authoritative:
            result.error(
                "name",
                f"Name '{name}' must match parent directory name '{directory_name}'",
            )
        else:
            result.warning(
                "name",
                f"Name '{name}' should match directory name '{directory_name}'",
            )

    _validate_description(description, result)

    compatibility = other_fields.get("compatibility")
    if compatibility and len(compatibility) > COMPATIBILITY_MAX_LENGTH:
        result.error(
            "compatibility",
            f"Compatibility must be <= {COMPATIBILITY_MAX_LENGTH} characters",
        )

    _validate_body(body, result)

    return result


class SkillValidator:
    """Validates SKILL.md files on disk and detached editor content."""

    def __init__(self, parser: FrontmatterParser | None = None):
        self.parser = parser or FrontmatterParser()

    def validate_file(self, path: Path) -> ValidationResult:
        """
        Validate a SKILL.md file in place.

        Delimiter problems are reported as a single ``format`` error and YAML
        problems as a single ``frontmatter`` error rather than raised.

        Raises:
            UnreadableEntryError: If the file cannot be read
        """
        path = Path(path)

        try:
            document = self.parser.parse_file(path)
        except MalformedBundleError as e:
            logger.debug("Cannot parse %s: %s", path, e.reason)
            result = ValidationResult()
            if e.is_syntax_error:
                detail = e.reason.removeprefix("parse error: ")
                result.error("frontmatter", f"Invalid YAML: {detail}")
            else:
                result.error("format", f"Invalid SKILL.md: {e.reason}")
            return result

        fields = document.fields
        return validate(
            fields.get("name", ""),
            fields.get("description", ""),
            path.parent.name,
            document.body,
            fields,
            directory_authoritative=True,
        )

    def validate_content(
        self,
        fields: dict[str, str],
        body: str,
        directory_name: str = "",
    ) -> ValidationResult:
        """Validate editor content that has not been written to disk yet."""
        return validate(
            fields.get("name", ""),
            fields.get("description", ""),
            directory_name,
            body,
            fields,
            directory_authoritative=False,
        )
