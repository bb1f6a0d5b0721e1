"""Pytest configuration and shared fixtures."""

import tempfile
from pathlib import Path
from typing import Callable, Generator

import pytest


def make_skill_md(name: str | None, description: str | None = "A test skill for unit tests", body: str = "# Instructions\n\nDo the thing.\n", extra: str = "") -> str:
    """Build SKILL.md text; a None name or description leaves the key out."""
    lines = ["---"]
    if name is not None:
        lines.append(f"name: {name}")
    if description is not None:
        lines.append(f"description: {description}")
    if extra:
        lines.append(extra.rstrip("\n"))
    lines.append("---")
    return "\n".join(lines) + "\n\n" + body


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def home_dir(temp_dir: Path) -> Path:
    """Create an empty home directory."""
    home = temp_dir / "home"
    home.mkdir()
    return home


@pytest.fixture
def write_skill() -> Callable[..., Path]:
    """Return a helper that creates <parent>/<dir_name>/SKILL.md.

    The frontmatter name defaults to the directory name.
    """

    def _write(parent: Path, dir_name: str, name: str | None = "", description: str | None = "A test skill for unit tests", body: str = "# Instructions\n\nDo the thing.\n", extra: str = "") -> Path:
        skill_dir = parent / dir_name
        skill_dir.mkdir(parents=True, exist_ok=True)
        skill_md = skill_dir / "SKILL.md"
        skill_md.write_text(
            make_skill_md(dir_name if name == "" else name, description, body, extra),
            encoding="utf-8",
        )
        return skill_md

    return _write
