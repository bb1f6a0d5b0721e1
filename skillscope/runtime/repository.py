"""Query entry points for skill discovery and validation.

This module provides the SkillsRepository class, which answers the questions
callers ask of the engine: which agents are installed and where their skills
live, which skills exist across all agents, and whether a given SKILL.md is
valid. Nothing is cached between calls; each query walks the filesystem again
so the answer reflects its current state.
"""

import logging
from collections.abc import Iterable
from datetime import datetime
from pathlib import Path

from skillscope.agents.registry import list_adapters
from skillscope.config import resolve_home
from skillscope.discovery.aggregate import merge_skills
from skillscope.discovery.index import SkillIndexer
from skillscope.discovery.scanner import SkillScanner
from skillscope.models import (
    AgentAdapter,
    AgentInfo,
    AuditEvent,
    GlobalDiscovery,
    ScanPolicy,
    Scope,
    ScopeFilter,
    SkillBundle,
    ValidationResult,
)
from skillscope.observability.audit import AuditSink
from skillscope.parsing.frontmatter import FrontmatterDocument, FrontmatterParser
from skillscope.validation import SkillValidator

logger = logging.getLogger(__name__)


class SkillsRepository:
    """Discovery and validation queries over every known agent.

    The repository holds configuration only: the adapters to consider, the
    default scan roots, the scan policy and an optional audit sink. It keeps
    no results between calls, so one instance can be shared between threads.

    Example:
        >>> from pathlib import Path
        >>> from skillscope import SkillsRepository
        >>>
        >>> repo = SkillsRepository(scan_roots=[Path("~/code")])
        >>>
        >>> for agent in repo.detect_agents():
        ...     if agent.detected:
        ...         print(agent.display_name, agent.global_.skills)
        >>>
        >>> for skill in repo.list_skills("project"):
        ...     print(f"{skill.name} ({', '.join(skill.agents)})")
    """

    def __init__(
        self,
        scan_roots: Iterable[Path | str] | None = None,
        home: Path | str | None = None,
        policy: ScanPolicy | None = None,
        audit_sink: AuditSink | None = None,
        adapters: Iterable[AgentAdapter] | None = None,
    ):
        """Initialize repository with configuration.

        Args:
            scan_roots: Directories searched for project skills when a query
                does not pass its own
            home: Home directory to use instead of the current user's; mainly
                useful in tests
            policy: Depth bounds, pruned directories and metadata file name
            audit_sink: Optional AuditSink for logging operations
            adapters: Adapters to consider; defaults to the full registry
        """
        self._scan_roots = [Path(root).expanduser() for root in scan_roots or []]
        self._home = home
        self._policy = policy or ScanPolicy()
        self._audit_sink = audit_sink
        self._adapters = tuple(adapters) if adapters is not None else list_adapters()

        self._parser = FrontmatterParser()
        self._scanner = SkillScanner(self._policy)
        self._indexer = SkillIndexer(parser=self._parser, audit_sink=audit_sink)
        self._validator = SkillValidator(parser=self._parser)

    @property
    def scan_roots(self) -> list[Path]:
        return list(self._scan_roots)

    def _roots_for(self, scan_roots: Iterable[Path | str] | None) -> list[Path]:
        if scan_roots is None:
            return list(self._scan_roots)
        return [Path(root).expanduser() for root in scan_roots]

    def detect_agents(self, scan_roots: Iterable[Path | str] | None = None) -> list[AgentInfo]:
        """Report every adapter's installation state and skill locations.

        Args:
            scan_roots: Directories to search for project skills; defaults
                to the repository's scan roots

        Returns:
            One AgentInfo per adapter, detected agents first, then by
            display name

        Raises:
            HomeDirectoryError: If the home directory cannot be determined
        """
        home = resolve_home(self._home)
        roots = self._roots_for(scan_roots)
        located = self._scanner.locate_project_dirs(roots, self._adapters)

        agents = []
        for adapter in self._adapters:
            global_dir = home.joinpath(*adapter.global_segments)
            agents.append(AgentInfo(
                id=adapter.id,
                display_name=adapter.display_name,
                detected=self._scanner.detect_presence(home, adapter),
                global_=GlobalDiscovery(
                    path=str(global_dir),
                    skills=self._scanner.find_skill_names(global_dir),
                ),
                projects=self._scanner.scan_for_projects(adapter, roots, located=located),
            ))

        agents.sort(key=lambda agent: (not agent.detected, agent.display_name))

        logger.debug(
            "Detected %d of %d agents",
            sum(agent.detected for agent in agents),
            len(agents),
        )
        self._audit("detect", "*", detail={
            "scan_roots": [str(root) for root in roots],
            "detected": [agent.id for agent in agents if agent.detected],
        })
        return agents

    def list_skills(
        self,
        scope: ScopeFilter | str = ScopeFilter.ALL,
        scan_roots: Iterable[Path | str] | None = None,
    ) -> list[SkillBundle]:
        """List every skill bundle, merged across agents.

        A bundle exposed to several agents appears once, with all of their
        ids in ``agents``.

        Args:
            scope: "all", "global" or "project"
            scan_roots: Directories to search for project skills; defaults
                to the repository's scan roots

        Returns:
            Merged bundles sorted by name

        Raises:
            ValueError: If scope is not a known value
            HomeDirectoryError: If the home directory cannot be determined
        """
        scope_filter = ScopeFilter(scope)
        include_global = scope_filter.includes(Scope.GLOBAL)
        include_project = scope_filter.includes(Scope.PROJECT)

        home = resolve_home(self._home) if include_global else None
        located: dict[str, list[Path]] = {}
        if include_project:
            located = self._scanner.locate_project_dirs(self._roots_for(scan_roots), self._adapters)

        bundles = []
        for adapter in self._adapters:
            if include_global:
                global_dir = home.joinpath(*adapter.global_segments)
                bundles.extend(self._indexer.index_files(
                    self._scanner.find_skill_files(global_dir),
                    Scope.GLOBAL,
                    adapter.id,
                ))

            if include_project:
                for skills_dir in located.get(adapter.id, []):
                    bundles.extend(self._indexer.index_files(
                        self._scanner.find_skill_files(skills_dir),
                        Scope.PROJECT,
                        adapter.id,
                    ))

        skills = merge_skills(bundles)

        self._audit("list", "*", detail={"scope": scope_filter.value, "count": len(skills)})
        return skills

    def parse_skill(self, path: Path | str) -> SkillBundle:
        """Parse a single SKILL.md into a SkillBundle with unknown scope.

        Raises:
            UnreadableEntryError: If the file cannot be read
            MalformedBundleError: If the frontmatter cannot be parsed
        """
        return self._indexer.index_file(Path(path), Scope.UNKNOWN)

    def read_skill_fields(self, path: Path | str) -> FrontmatterDocument:
        """Read the flattened frontmatter fields and body of a SKILL.md.

        Raises:
            UnreadableEntryError: If the file cannot be read
            MalformedBundleError: If the frontmatter cannot be parsed
        """
        return self._parser.parse_file(Path(path))

    def validate_skill(self, path: Path | str) -> ValidationResult:
        """Validate a SKILL.md on disk; its directory name is authoritative.

        Raises:
            UnreadableEntryError: If the file cannot be read
        """
        path = Path(path)
        result = self._validator.validate_file(path)
        self._audit("validate", path.parent.name, path=str(path), detail={
            "valid": result.valid,
            "errors": len(result.errors),
            "warnings": len(result.warnings),
        })
        return result

    def validate_content(
        self,
        fields: dict[str, str],
        body: str,
        directory_name: str = "",
    ) -> ValidationResult:
        """Validate SKILL.md content that has not been written to disk."""
        return self._validator.validate_content(fields, body, directory_name)

    def skills_directories(self, cwd: Path | str | None = None) -> dict[str, list[Path]]:
        """Return the skill directories that currently exist.

        Args:
            cwd: Project directory to check for project-level skill
                directories; defaults to the current working directory

        Returns:
            {"project": [...], "global": [...]}, each without duplicates and
            in registry order

        Raises:
            HomeDirectoryError: If the home directory cannot be determined
        """
        home = resolve_home(self._home)
        cwd = Path(cwd) if cwd is not None else Path.cwd()

        project_dirs: list[Path] = []
        global_dirs: list[Path] = []

        for adapter in self._adapters:
            global_dir = home.joinpath(*adapter.global_segments)
            if global_dir.exists() and global_dir not in global_dirs:
                global_dirs.append(global_dir)

            project_dir = cwd.joinpath(*adapter.project_segments)
            if project_dir.exists() and project_dir not in project_dirs:
                project_dirs.append(project_dir)

        return {"project": project_dirs, "global": global_dirs}

    def _audit(self, kind: str, skill: str, path: str | None = None, detail: dict | None = None) -> None:
        if self._audit_sink is None:
            return
        self._audit_sink.log(AuditEvent(
            ts=datetime.now(),
            kind=kind,
            skill=skill,
            path=path,
            detail=detail or {},
        ))
