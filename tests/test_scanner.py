"""Unit tests for SkillScanner and the directory walker."""

import os
from pathlib import Path

import pytest

from skillscope.agents import get_adapter
from skillscope.discovery import SkillScanner
from skillscope.discovery.scanner import ends_with_segments, strip_segments, walk_directories
from skillscope.models import AgentAdapter, ScanPolicy


class TestWalkDirectories:
    """Tests for walk_directories."""

    def test_name_order(self, temp_dir: Path):
        for name in ["c", "a", "b"]:
            (temp_dir / name).mkdir()

        visited = [path for path, _ in walk_directories(temp_dir)]

        assert visited == [temp_dir, temp_dir / "a", temp_dir / "b", temp_dir / "c"]

    def test_depth_bound(self, temp_dir: Path):
        (temp_dir / "one" / "two").mkdir(parents=True)

        assert [p for p, _ in walk_directories(temp_dir, max_depth=1)] == [temp_dir]
        assert [p for p, _ in walk_directories(temp_dir, max_depth=2)] == [temp_dir, temp_dir / "one"]

    def test_file_names(self, temp_dir: Path):
        (temp_dir / "SKILL.md").write_text("x")
        (temp_dir / "sub").mkdir()

        root, files = next(walk_directories(temp_dir))

        assert root == temp_dir
        assert files == ["SKILL.md"]

    def test_pruned(self, temp_dir: Path):
        (temp_dir / "node_modules" / "pkg").mkdir(parents=True)
        (temp_dir / "src").mkdir()

        visited = [p for p, _ in walk_directories(temp_dir, pruned=frozenset({"node_modules"}))]

        assert visited == [temp_dir, temp_dir / "src"]

    def test_missing_root(self, temp_dir: Path):
        assert list(walk_directories(temp_dir / "missing")) == []

    def test_symlink_loop(self, temp_dir: Path):
        (temp_dir / "a").mkdir()
        os.symlink(temp_dir, temp_dir / "a" / "loop")

        visited = [p for p, _ in walk_directories(temp_dir)]

        assert visited == [temp_dir, temp_dir / "a"]

    def test_follows_symlinked_directory(self, temp_dir: Path):
        target = temp_dir / "target"
        (target / "inner").mkdir(parents=True)
        root = temp_dir / "root"
        root.mkdir()
        os.symlink(target, root / "link")

        visited = [p for p, _ in walk_directories(root)]

        assert root / "link" / "inner" in visited

    def test_not_following_symlinks(self, temp_dir: Path):
        target = temp_dir / "target"
        target.mkdir()
        root = temp_dir / "root"
        root.mkdir()
        os.symlink(target, root / "link")

        root_entry, files = next(walk_directories(root, follow_symlinks=False))

        assert files == ["link"]


class TestSegmentHelpers:
    """Tests for the path segment helpers."""

    def test_ends_with_segments(self):
        assert ends_with_segments(Path("/p/.claude/skills"), (".claude", "skills"))
        assert not ends_with_segments(Path("/p/x.claude/skills"), (".claude", "skills"))
        assert not ends_with_segments(Path("/p/.claude/skills/a"), (".claude", "skills"))

    def test_needs_a_project_root(self):
        assert not ends_with_segments(Path(".claude/skills"), (".claude", "skills"))

    def test_strip_segments(self):
        assert strip_segments(Path("/p/.claude/skills"), 2) == Path("/p")
        assert strip_segments(Path(".claude/skills"), 2) is None


class TestDetectPresence:
    """Tests for SkillScanner.detect_presence."""

    def test_not_installed(self, home_dir: Path):
        assert not SkillScanner().detect_presence(home_dir, get_adapter("claude-code"))

    def test_global_directory(self, home_dir: Path):
        (home_dir / ".cursor" / "skills").mkdir(parents=True)

        assert SkillScanner().detect_presence(home_dir, get_adapter("cursor"))

    def test_presence_indicator(self, home_dir: Path):
        (home_dir / ".codeium").mkdir()

        assert SkillScanner().detect_presence(home_dir, get_adapter("windsurf"))


class TestFindSkills:
    """Tests for find_skill_files and find_skill_names."""

    def test_finds_skills(self, temp_dir: Path, write_skill):
        write_skill(temp_dir, "b-skill")
        write_skill(temp_dir, "a-skill")

        assert SkillScanner().find_skill_names(temp_dir) == ["a-skill", "b-skill"]

    def test_skill_at_root(self, temp_dir: Path, write_skill):
        skill_md = write_skill(temp_dir, "solo")

        assert SkillScanner().find_skill_files(skill_md.parent) == [skill_md]

    def test_name_depth(self, temp_dir: Path, write_skill):
        write_skill(temp_dir / "a", "two")
        write_skill(temp_dir / "a" / "b", "three")

        assert SkillScanner().find_skill_names(temp_dir) == ["two"]

    def test_bundle_depth(self, temp_dir: Path, write_skill):
        write_skill(temp_dir / "a" / "b", "three")
        write_skill(temp_dir / "a" / "b" / "c", "four")

        files = SkillScanner().find_skill_files(temp_dir)

        assert [f.parent.name for f in files] == ["three"]

    def test_missing_directory(self, temp_dir: Path):
        assert SkillScanner().find_skill_files(temp_dir / "missing") == []
        assert SkillScanner().find_skill_names(temp_dir / "missing") == []

    def test_custom_metadata_filename(self, temp_dir: Path):
        (temp_dir / "demo").mkdir()
        (temp_dir / "demo" / "skill.yaml").write_text("x")

        scanner = SkillScanner(ScanPolicy(metadata_filename="skill.yaml"))

        assert scanner.find_skill_names(temp_dir) == ["demo"]


class TestScanForProjects:
    """Tests for project discovery below scan roots."""

    def test_empty_tree(self, temp_dir: Path):
        assert SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir]) == []

    def test_finds_project(self, temp_dir: Path, write_skill):
        project = temp_dir / "code" / "app"
        write_skill(project / ".claude" / "skills", "deploy")

        projects = SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir])

        assert len(projects) == 1
        assert projects[0].project_root == str(project)
        assert projects[0].path == str(project / ".claude" / "skills")
        assert projects[0].skills == ["deploy"]

    def test_empty_skill_directory_not_reported(self, temp_dir: Path):
        (temp_dir / "app" / ".claude" / "skills").mkdir(parents=True)

        assert SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir]) == []

    def test_nested_roots_report_once(self, temp_dir: Path, write_skill):
        project = temp_dir / "code" / "app"
        write_skill(project / ".claude" / "skills", "deploy")

        projects = SkillScanner().scan_for_projects(
            get_adapter("claude-code"),
            [temp_dir, temp_dir / "code"],
        )

        assert len(projects) == 1

    def test_pruned_directories_skipped(self, temp_dir: Path, write_skill):
        write_skill(temp_dir / "node_modules" / "pkg" / ".claude" / "skills", "vendored")

        assert SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir]) == []

    def test_sorted_by_path(self, temp_dir: Path, write_skill):
        write_skill(temp_dir / "zeta" / ".claude" / "skills", "z")
        write_skill(temp_dir / "alpha" / ".claude" / "skills", "a")

        projects = SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir])

        assert [Path(p.project_root).name for p in projects] == ["alpha", "zeta"]

    def test_missing_root_skipped(self, temp_dir: Path):
        assert SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir / "missing"]) == []

    def test_shared_project_path(self, temp_dir: Path, write_skill):
        write_skill(temp_dir / "app" / ".agents" / "skills", "shared")
        adapters = [get_adapter("cursor"), get_adapter("codex")]
        scanner = SkillScanner()

        located = scanner.locate_project_dirs([temp_dir], adapters)

        assert located["cursor"] == located["codex"] == [temp_dir / "app" / ".agents" / "skills"]
        for adapter in adapters:
            assert scanner.scan_for_projects(adapter, [], located=located)[0].skills == ["shared"]

    def test_multi_segment_project_path(self, temp_dir: Path, write_skill):
        adapter = AgentAdapter("deep", "Deep", ".tool/config/skills", ".tool/skills")
        write_skill(temp_dir / "app" / ".tool" / "config" / "skills", "deep-skill")

        projects = SkillScanner().scan_for_projects(adapter, [temp_dir])

        assert projects[0].project_root == str(temp_dir / "app")

    def test_relative_root(self, temp_dir: Path, write_skill, monkeypatch: pytest.MonkeyPatch):
        write_skill(temp_dir / "app" / ".claude" / "skills", "deploy")
        monkeypatch.chdir(temp_dir)

        projects = SkillScanner().scan_for_projects(get_adapter("claude-code"), [Path(".")])

        assert Path(projects[0].project_root).is_absolute()


@pytest.fixture
def blocked_dir(temp_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Make os.scandir raise PermissionError for <temp_dir>/blocked."""
    blocked = temp_dir / "blocked"
    real_scandir = os.scandir

    def guarded_scandir(path):
        if isinstance(path, (str, os.PathLike)) and Path(path) == blocked:
            raise PermissionError(13, "Permission denied", str(path))
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", guarded_scandir)
    return blocked


class TestUnreadableEntries:
    """Unreadable directories are skipped without aborting the walk."""

    def test_walk_skips_unreadable_directory(self, temp_dir: Path, blocked_dir: Path):
        (blocked_dir / "inner").mkdir(parents=True)
        (temp_dir / "open").mkdir()

        visited = [p for p, _ in walk_directories(temp_dir)]

        assert visited == [temp_dir, temp_dir / "open"]

    def test_unreadable_root(self, temp_dir: Path, blocked_dir: Path):
        blocked_dir.mkdir()

        assert list(walk_directories(blocked_dir)) == []

    def test_find_skills_skips_unreadable_directory(self, temp_dir: Path, blocked_dir: Path, write_skill):
        write_skill(blocked_dir, "hidden")
        write_skill(temp_dir, "visible")

        assert SkillScanner().find_skill_names(temp_dir) == ["visible"]

    def test_scan_for_projects_skips_unreadable_directory(self, temp_dir: Path, blocked_dir: Path, write_skill):
        write_skill(blocked_dir / ".claude" / "skills", "hidden")
        write_skill(temp_dir / "app" / ".claude" / "skills", "deploy")

        projects = SkillScanner().scan_for_projects(get_adapter("claude-code"), [temp_dir])

        assert [p.project_root for p in projects] == [str(temp_dir / "app")]
        assert projects[0].skills == ["deploy"]

    def test_dangling_symlink_is_not_a_directory(self, temp_dir: Path, write_skill):
        os.symlink(temp_dir / "missing", temp_dir / "dangling")
        write_skill(temp_dir, "visible")

        assert SkillScanner().find_skill_names(temp_dir) == ["visible"]
