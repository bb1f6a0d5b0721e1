"""Filesystem scanning for agent installations and skill bundles."""

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

from skillscope.agents.registry import presence_indicators
from skillscope.models import AgentAdapter, ProjectDiscovery, ScanPolicy

logger = logging.getLogger(__name__)


def walk_directories(
    root: Path,
    max_depth: int | None = None,
    pruned: frozenset[str] = frozenset(),
    follow_symlinks: bool = True,
) -> Iterator[tuple[Path, list[str]]]:
    """Walk a directory tree and yield ``(directory, file_names)`` pairs.

    Depth counts like ``find -maxdepth``: the root is depth 0 and a file
    directly inside it is depth 1, so ``max_depth=1`` only looks at the
    root's own files. Entries are visited in name order. Child directories
    whose name is in ``pruned`` are not entered. When following symlinks,
    a link back to one of the current directory's ancestors is skipped.

    Directories that cannot be listed and entries that cannot be inspected
    are logged and skipped; the walk never raises for them.
    """
    try:
        root_stat = root.stat()
    except OSError as e:
        logger.debug("Skipping unreadable root %s: %s", root, e)
        return

    stack = [(root, 0, ((root_stat.st_dev, root_stat.st_ino),))]

    while stack:
        directory, depth, ancestors = stack.pop()

        try:
            with os.scandir(directory) as it:
                entries = sorted(it, key=lambda entry: entry.name)
        except OSError as e:
            logger.debug("Skipping unreadable directory %s: %s", directory, e)
            continue

        file_names = []
        subdirectories = []
        for entry in entries:
            try:
                if entry.is_dir(follow_symlinks=follow_symlinks):
                    subdirectories.append(entry)
                else:
                    file_names.append(entry.name)
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry.path, e)

        yield directory, file_names

        if max_depth is not None and depth + 1 >= max_depth:
            continue

        # Reversed so that popping from the stack visits children in name order
        for entry in reversed(subdirectories):
            if entry.name in pruned:
                continue
            try:
                entry_stat = entry.stat(follow_symlinks=follow_symlinks)
            except OSError as e:
                logger.debug("Skipping unreadable entry %s: %s", entry.path, e)
                continue
            key = (entry_stat.st_dev, entry_stat.st_ino)
            if key in ancestors:
                logger.debug("Skipping symlink loop at %s", entry.path)
                continue
            stack.append((Path(entry.path), depth + 1, ancestors + (key,)))


def ends_with_segments(path: Path, segments: tuple[str, ...]) -> bool:
    """Return True if the last path components equal ``segments``.

    The path must have at least one component left over, otherwise there
    would be no project root in front of the match.
    """
    parts = path.parts
    count = len(segments)
    return count > 0 and len(parts) > count and parts[-count:] == segments


def strip_segments(path: Path, count: int) -> Path | None:
    """Drop ``count`` trailing components from ``path``.

    Returns None when the path does not have enough components.
    """
    if count < 1 or len(path.parts) <= count:
        return None
    return path.parents[count - 1]


class SkillScanner:
    """Scans the filesystem for agent installations and skill bundles.

    A skill bundle is a directory containing a SKILL.md file. Global bundles
    live under each agent's directory in the home directory; project bundles
    live under ``<project>/<project_path>`` anywhere below the scan roots.

    Example:
        >>> scanner = SkillScanner()
        >>> scanner.find_skill_names(Path.home() / ".claude" / "skills")
        ['pdf', 'xlsx']
    """

    def __init__(self, policy: ScanPolicy | None = None):
        self.policy = policy or ScanPolicy()

    def detect_presence(self, home: Path, adapter: AgentAdapter) -> bool:
        """Return True if the agent appears to be installed for this user.

        The agent counts as installed if its global skill directory exists or
        any of its presence indicators exist under the home directory.
        """
        if home.joinpath(*adapter.global_segments).exists():
            return True

        for indicator in presence_indicators(adapter.id):
            if home.joinpath(*indicator.split("/")).exists():
                return True

        return False

    def find_skill_files(self, directory: Path, max_depth: int | None = None) -> list[Path]:
        """Find SKILL.md files below ``directory``.

        Args:
            directory: Directory to search
            max_depth: Depth bound; defaults to the policy's ``bundle_depth``

        Returns:
            Paths of the metadata files, in walk order
        """
        if max_depth is None:
            max_depth = self.policy.bundle_depth

        if not directory.is_dir():
            return []

        skill_files = []
        for current, file_names in walk_directories(
            directory,
            max_depth=max_depth,
            follow_symlinks=self.policy.follow_symlinks,
        ):
            if self.policy.metadata_filename in file_names:
                skill_files.append(current / self.policy.metadata_filename)

        return skill_files

    def find_skill_names(self, directory: Path, max_depth: int | None = None) -> list[str]:
        """Return the names of directories holding a SKILL.md below ``directory``.

        Defaults to the policy's ``name_depth`` bound.
        """
        if max_depth is None:
            max_depth = self.policy.name_depth

        return [
            skill_file.parent.name
            for skill_file in self.find_skill_files(directory, max_depth=max_depth)
        ]

    def locate_project_dirs(
        self,
        roots: Iterable[Path],
        adapters: Iterable[AgentAdapter],
    ) -> dict[str, list[Path]]:
        """Find every directory below the scan roots that matches an adapter.

        Each root is walked once, without a depth bound but skipping the
        policy's pruned directories. A directory matches an adapter when its
        path ends with all segments of the adapter's ``project_path``.

        Returns:
            Mapping of adapter id to matching directories, in walk order.
            Nested roots can yield the same directory more than once.
        """
        adapters = list(adapters)
        located: dict[str, list[Path]] = {adapter.id: [] for adapter in adapters}

        # Several agents share a project path such as ".agents/skills"
        by_segments: dict[tuple[str, ...], list[str]] = {}
        for adapter in adapters:
            by_segments.setdefault(adapter.project_segments, []).append(adapter.id)

        for root in roots:
            root = Path(root).expanduser().absolute()

            if not root.is_dir():
                logger.debug("Skipping scan root %s: not a directory", root)
                continue

            for directory, _ in walk_directories(
                root,
                pruned=self.policy.pruned_dirs,
                follow_symlinks=self.policy.follow_symlinks,
            ):
                for segments, adapter_ids in by_segments.items():
                    if ends_with_segments(directory, segments):
                        for adapter_id in adapter_ids:
                            located[adapter_id].append(directory)

        return located

    def scan_for_projects(
        self,
        adapter: AgentAdapter,
        roots: Iterable[Path],
        located: dict[str, list[Path]] | None = None,
    ) -> list[ProjectDiscovery]:
        """Find projects below the scan roots that have skills for ``adapter``.

        Args:
            adapter: Agent whose project_path is searched for
            roots: Scan roots; ignored when ``located`` is given
            located: Result of locate_project_dirs, so that several adapters
                can share one walk of the scan roots

        Returns:
            One ProjectDiscovery per project root that holds at least one
            skill, sorted by skill directory path
        """
        if located is None:
            located = self.locate_project_dirs(roots, [adapter])

        depth = len(adapter.project_segments)
        seen_roots: set[Path] = set()
        projects = []

        for path in located.get(adapter.id, []):
            project_root = strip_segments(path, depth)
            if project_root is None:
                continue

            # A project reachable from two scan roots is reported once
            if project_root in seen_roots:
                continue
            seen_roots.add(project_root)

            skills = self.find_skill_names(path)
            if skills:
                projects.append(ProjectDiscovery(
                    path=str(path),
                    project_root=str(project_root),
                    skills=skills,
                ))

        projects.sort(key=lambda project: project.path)
        return projects
