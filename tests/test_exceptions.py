"""Unit tests for exception classes."""

from pathlib import Path

import pytest

from skillscope.exceptions import (
    AdapterNotFoundError,
    HomeDirectoryError,
    MalformedBundleError,
    SkillsError,
    UnreadableEntryError,
)


class TestExceptionHierarchy:
    """Tests for exception class hierarchy."""

    def test_base_exception(self):
        with pytest.raises(SkillsError):
            raise SkillsError("Base error")

    @pytest.mark.parametrize("exc_class", [
        HomeDirectoryError,
        AdapterNotFoundError,
        MalformedBundleError,
    ])
    def test_subclasses(self, exc_class):
        assert issubclass(exc_class, SkillsError)

        with pytest.raises(SkillsError):
            raise exc_class("failure")

    def test_unreadable_entry_error(self):
        assert issubclass(UnreadableEntryError, SkillsError)

        with pytest.raises(SkillsError):
            raise UnreadableEntryError(Path("/tmp/x"), "denied")


class TestMalformedBundleError:
    """Tests for MalformedBundleError attributes."""

    def test_message_without_path(self):
        error = MalformedBundleError("missing opening delimiter")

        assert str(error) == "missing opening delimiter"
        assert error.reason == "missing opening delimiter"
        assert error.path is None

    def test_message_with_path(self):
        path = Path("/p/.claude/skills/demo/SKILL.md")
        error = MalformedBundleError("missing closing delimiter", path=path)

        assert str(path) in str(error)
        assert "missing closing delimiter" in str(error)
        assert error.path == path

    def test_is_syntax_error(self):
        assert MalformedBundleError("parse error: bad indent").is_syntax_error
        assert not MalformedBundleError("missing closing delimiter").is_syntax_error


class TestUnreadableEntryError:
    """Tests for UnreadableEntryError attributes."""

    def test_message(self):
        error = UnreadableEntryError(Path("/x/SKILL.md"), "Permission denied")

        assert str(error) == "Failed to read /x/SKILL.md: Permission denied"
        assert error.path == Path("/x/SKILL.md")
        assert error.reason == "Permission denied"
