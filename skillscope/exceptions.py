"""Exception classes for skillscope."""

from pathlib import Path


class SkillsError(Exception):
    """Base exception for all skillscope errors."""
    pass


class HomeDirectoryError(SkillsError):
    """Raised when the user's home directory cannot be determined."""
    pass


class AdapterNotFoundError(SkillsError):
    """Raised when an agent adapter id is not in the registry."""
    pass


class MalformedBundleError(SkillsError):
    """Raised when a SKILL.md file cannot be parsed.

    Attributes:
        reason: Short description of what is wrong with the file
            (e.g. "missing opening delimiter" or "parse error: ...")
        path: Path to the offending file, when known
    """

    def __init__(self, reason: str, path: Path | None = None):
        self.reason = reason
        self.path = path
        if path is not None:
            super().__init__(f"Malformed SKILL.md at {path}: {reason}")
        else:
            super().__init__(reason)

    @property
    def is_syntax_error(self) -> bool:
        """True when the frontmatter delimiters were fine but the YAML was not."""
        return self.reason.startswith("parse error")


class UnreadableEntryError(SkillsError):
    """Raised when a file or directory entry cannot be read."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")
