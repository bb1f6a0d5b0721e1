"""Frontmatter parsing for SKILL.md files."""

import io
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

import yaml

from skillscope.exceptions import MalformedBundleError, UnreadableEntryError

DELIMITER = "---"


@dataclass
class FrontmatterDocument:
    """Flattened frontmatter fields plus the markdown body of a SKILL.md.

    Nested mappings are flattened into ``parent.child`` keys, so the
    ``metadata`` block ``{author: me}`` becomes ``{"metadata.author": "me"}``.
    """
    fields: dict[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def name(self) -> str | None:
        return self.fields.get("name")

    @property
    def description(self) -> str | None:
        return self.fields.get("description")

    @property
    def license(self) -> str | None:
        return self.fields.get("license")

    @property
    def compatibility(self) -> str | None:
        return self.fields.get("compatibility")

    @property
    def allowed_tools(self) -> str | None:
        return self.fields.get("allowed-tools")

    @property
    def metadata(self) -> dict[str, str] | None:
        """Children of the ``metadata`` mapping, or None if there are none."""
        prefix = "metadata."
        children = {
            key[len(prefix):]: value
            for key, value in self.fields.items()
            if key.startswith(prefix)
        }
        return children or None

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {"frontmatter": dict(self.fields), "body": self.body}


def render_scalar(value) -> str:
    """Render a parsed YAML value as text.

    Strings are returned unchanged; booleans and numbers use their YAML
    spelling, dates and timestamps ISO 8601; anything else falls back to
    repr().
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return str(value)
    return repr(value)


def flatten_fields(data: dict) -> dict[str, str]:
    """Flatten one level of nested mappings into dotted keys.

    Null values are treated as absent.
    """
    flat: dict[str, str] = {}
    for key, value in data.items():
        key = str(key)
        if value is None:
            continue
        if isinstance(value, dict):
            for child_key, child_value in value.items():
                if child_value is None:
                    continue
                flat[f"{key}.{child_key}"] = render_scalar(child_value)
        else:
            flat[key] = render_scalar(value)
    return flat


class FrontmatterParser:
    """Parses YAML frontmatter from SKILL.md files."""

    def split(self, content: str) -> tuple[str, str]:
        """
        Split content into (frontmatter_text, body).

        The content must start, after leading whitespace, with a '---' line.
        The frontmatter ends at the next line that is exactly '---'. One
        empty line (LF or CRLF) directly after the closing delimiter is
        dropped from the body; the rest of the body, including a
        whitespace-only line in that position, is kept as-is.

        Raises:
            MalformedBundleError: If either delimiter is missing
        """
        # Only "\n" ends a line; other Unicode separators stay inside it
        lines = list(io.StringIO(content.lstrip()))

        if not lines or lines[0].rstrip("\r\n") != DELIMITER:
            raise MalformedBundleError("missing opening delimiter")

        for index in range(1, len(lines)):
            if lines[index].rstrip("\r\n") == DELIMITER:
                closing = index
                break
        else:
            raise MalformedBundleError("missing closing delimiter")

        frontmatter_text = "".join(lines[1:closing])
        body = "".join(lines[closing + 1:])

        if body.startswith("\r\n"):
            body = body[2:]
        elif body.startswith("\n"):
            body = body[1:]

        return frontmatter_text, body

    def parse(self, content: str) -> FrontmatterDocument:
        """
        Parse SKILL.md content into flattened fields and body.

        Args:
            content: Raw SKILL.md text

        Returns:
            FrontmatterDocument with flattened fields and the body

        Raises:
            MalformedBundleError: If delimiters are missing, the YAML is
                invalid, or the frontmatter is not a mapping
        """
        frontmatter_text, body = self.split(content)

        try:
            data = yaml.safe_load(frontmatter_text)
        except yaml.YAMLError as e:
            raise MalformedBundleError(f"parse error: {e}")

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise MalformedBundleError(
                f"parse error: frontmatter must be a mapping, got {type(data).__name__}"
            )

        return FrontmatterDocument(fields=flatten_fields(data), body=body)

    def parse_file(self, path: Path) -> FrontmatterDocument:
        """
        Read and parse a SKILL.md file.

        Args:
            path: Path to the SKILL.md file itself

        Raises:
            UnreadableEntryError: If the file cannot be read as UTF-8 text
            MalformedBundleError: If the content cannot be parsed; the
                error carries the file path
        """
        path = Path(path)

        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise UnreadableEntryError(path, str(e))

        try:
            return self.parse(content)
        except MalformedBundleError as e:
            raise MalformedBundleError(e.reason, path=path) from e
