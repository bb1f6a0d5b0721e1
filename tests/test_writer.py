"""Tests for writing SKILL.md files."""

from pathlib import Path

import pytest

from skillscope.exceptions import SkillsError
from skillscope.parsing import FrontmatterParser, render_skill_md, write_skill_md


class TestRenderSkillMd:
    """Tests for render_skill_md."""

    def test_layout(self):
        content = render_skill_md({"name": "demo", "description": "Demo skill"}, "# Demo\n")

        assert content == "---\nname: demo\ndescription: Demo skill\n---\n\n# Demo\n"

    def test_key_order(self):
        fields = {
            "metadata.version": "1.0",
            "zeta": "z",
            "allowed_tools": "Read",
            "license": "MIT",
            "description": "Demo skill",
            "name": "demo",
            "metadata.author": "me",
        }

        content = render_skill_md(fields, "")

        assert content == (
            "---\n"
            "name: demo\n"
            "description: Demo skill\n"
            "license: MIT\n"
            "allowed-tools: Read\n"
            "zeta: z\n"
            "metadata:\n"
            "  author: me\n"
            "  version: '1.0'\n"
            "---\n\n"
        )

    def test_empty_optional_values_skipped(self):
        content = render_skill_md({"name": "demo", "description": "Demo", "license": ""}, "")

        assert "license" not in content

    def test_values_needing_quotes(self):
        fields = {"name": "demo", "description": "Use when: the user asks", "metadata.beta": "true"}

        document = FrontmatterParser().parse(render_skill_md(fields, ""))

        assert document.fields == fields


class TestRoundTrip:
    """Writing then parsing returns what was written."""

    @pytest.mark.parametrize("body", [
        "",
        "# Title\n",
        "# Title\n\nSome text\n",
        "\nStarts with a blank line\n",
        "No trailing newline",
    ])
    def test_body_preserved(self, body):
        fields = {"name": "demo", "description": "Demo skill for round trips"}

        document = FrontmatterParser().parse(render_skill_md(fields, body))

        assert document.body == body
        assert document.name == "demo"
        assert document.description == "Demo skill for round trips"

    def test_optional_fields_preserved(self):
        fields = {
            "name": "demo",
            "description": "Demo skill",
            "license": "Apache-2.0",
            "compatibility": "Python 3.10+",
            "allowed-tools": "Read Grep",
            "metadata.author": "me",
        }

        document = FrontmatterParser().parse(render_skill_md(fields, "Body\n"))

        assert document.fields == fields

    def test_absent_optional_fields_stay_absent(self):
        document = FrontmatterParser().parse(
            render_skill_md({"name": "demo", "description": "Demo skill"}, "Body\n")
        )

        assert document.license is None
        assert document.compatibility is None
        assert document.metadata is None
        assert document.allowed_tools is None


class TestWriteSkillMd:
    """Tests for write_skill_md."""

    def test_creates_parent_directories(self, temp_dir: Path):
        path = temp_dir / ".claude" / "skills" / "demo" / "SKILL.md"

        write_skill_md(path, {"name": "demo", "description": "Demo skill"}, "Body\n")

        assert path.exists()
        assert FrontmatterParser().parse_file(path).body == "Body\n"

    def test_overwrites_existing_file(self, temp_dir: Path):
        path = temp_dir / "demo" / "SKILL.md"
        write_skill_md(path, {"name": "demo", "description": "First"}, "")
        write_skill_md(path, {"name": "demo", "description": "Second"}, "")

        assert FrontmatterParser().parse_file(path).description == "Second"

    def test_write_failure(self, temp_dir: Path):
        blocker = temp_dir / "file"
        blocker.write_text("not a directory")

        with pytest.raises(SkillsError, match="Failed to write"):
            write_skill_md(blocker / "demo" / "SKILL.md", {"name": "demo"}, "")
