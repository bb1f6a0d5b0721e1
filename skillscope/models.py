"""Data models for skillscope."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


METADATA_FILENAME = "SKILL.md"

DEFAULT_PRUNED_DIRS = frozenset({
    "node_modules",
    ".git",
    "target",
    "dist",
    "build",
    ".next",
    ".nuxt",
    ".venv",
    "venv",
    "__pycache__",
    ".cache",
    "vendor",
    "bower_components",
})


class Scope(Enum):
    """Where a skill bundle was found."""
    GLOBAL = "global"
    PROJECT = "project"
    UNKNOWN = "unknown"


class ScopeFilter(Enum):
    """Which scopes a listing query should cover."""
    ALL = "all"
    GLOBAL = "global"
    PROJECT = "project"

    def includes(self, scope: Scope) -> bool:
        """Return True if bundles of the given scope belong in the result."""
        if self is ScopeFilter.ALL:
            return scope in (Scope.GLOBAL, Scope.PROJECT)
        return self.value == scope.value


def _check_relative_path(value: str, label: str) -> None:
    if not value:
        raise ValueError(f"{label} must not be empty")
    if "\\" in value:
        raise ValueError(f"{label} must use forward slashes: {value!r}")
    if value.startswith("/"):
        raise ValueError(f"{label} must be relative: {value!r}")
    if ".." in value.split("/"):
        raise ValueError(f"{label} must not contain '..': {value!r}")


@dataclass(frozen=True)
class AgentAdapter:
    """Skill directory conventions of one third-party agent tool."""
    id: str
    display_name: str
    project_path: str  # relative to a project root, e.g. ".claude/skills"
    global_path: str  # relative to the home directory

    def __post_init__(self):
        if not self.id:
            raise ValueError("Adapter id must not be empty")
        _check_relative_path(self.project_path, "project_path")
        _check_relative_path(self.global_path, "global_path")

    @property
    def project_segments(self) -> tuple[str, ...]:
        """Non-empty segments of project_path."""
        return tuple(part for part in self.project_path.split("/") if part)

    @property
    def global_segments(self) -> tuple[str, ...]:
        """Non-empty segments of global_path."""
        return tuple(part for part in self.global_path.split("/") if part)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "project_path": self.project_path,
            "global_path": self.global_path,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AgentAdapter":
        """Deserialize from dict."""
        return cls(
            id=data["id"],
            display_name=data["display_name"],
            project_path=data["project_path"],
            global_path=data["global_path"],
        )


@dataclass
class SkillBundle:
    """One discovered SKILL.md and the agents that expose it."""
    name: str
    description: str
    install_path: str
    scope: Scope
    body: str = ""
    license: str | None = None
    compatibility: str | None = None
    metadata: dict[str, str] | None = None
    allowed_tools: str | None = None
    agents: list[str] = field(default_factory=list)

    def add_agent(self, agent_id: str) -> None:
        """Record another agent for this bundle, ignoring duplicates."""
        if agent_id not in self.agents:
            self.agents.append(agent_id)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict.

        Optional fields that are not set are left out, matching how the
        bundle looks on disk.
        """
        data = {
            "name": self.name,
            "description": self.description,
        }
        if self.license is not None:
            data["license"] = self.license
        if self.compatibility is not None:
            data["compatibility"] = self.compatibility
        if self.metadata is not None:
            data["metadata"] = dict(self.metadata)
        if self.allowed_tools is not None:
            data["allowed_tools"] = self.allowed_tools
        data.update({
            "install_path": self.install_path,
            "scope": self.scope.value,
            "agents": list(self.agents),
            "body": self.body,
        })
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "SkillBundle":
        """Deserialize from dict."""
        return cls(
            name=data["name"],
            description=data["description"],
            install_path=data["install_path"],
            scope=Scope(data.get("scope", "unknown")),
            body=data.get("body", ""),
            license=data.get("license"),
            compatibility=data.get("compatibility"),
            metadata=data.get("metadata"),
            allowed_tools=data.get("allowed_tools"),
            agents=list(data.get("agents", [])),
        )


@dataclass
class GlobalDiscovery:
    """Skills found in an adapter's per-user skill directory."""
    path: str
    skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {"path": self.path, "skills": list(self.skills)}

    @classmethod
    def from_dict(cls, data: dict) -> "GlobalDiscovery":
        """Deserialize from dict."""
        return cls(path=data["path"], skills=list(data.get("skills", [])))


@dataclass
class ProjectDiscovery:
    """Skills found in one project's skill directory for one adapter."""
    path: str
    project_root: str
    skills: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "path": self.path,
            "project_root": self.project_root,
            "skills": list(self.skills),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectDiscovery":
        """Deserialize from dict."""
        return cls(
            path=data["path"],
            project_root=data["project_root"],
            skills=list(data.get("skills", [])),
        )


@dataclass
class AgentInfo:
    """Detection result for one adapter."""
    id: str
    display_name: str
    detected: bool
    global_: GlobalDiscovery
    projects: list[ProjectDiscovery] = field(default_factory=list)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "id": self.id,
            "display_name": self.display_name,
            "detected": self.detected,
            "global": self.global_.to_dict(),
            "projects": [project.to_dict() for project in self.projects],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AgentInfo":
        """Deserialize from dict."""
        return cls(
            id=data["id"],
            display_name=data["display_name"],
            detected=data["detected"],
            global_=GlobalDiscovery.from_dict(data["global"]),
            projects=[ProjectDiscovery.from_dict(p) for p in data.get("projects", [])],
        )


@dataclass
class Diagnostic:
    """A single validation finding."""
    field: str
    message: str
    severity: str  # "error" or "warning"

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "field": self.field,
            "message": self.message,
            "severity": self.severity,
        }


@dataclass
class ValidationResult:
    """Outcome of validating one skill definition."""
    errors: list[Diagnostic] = field(default_factory=list)
    warnings: list[Diagnostic] = field(default_factory=list)

    @property
    def valid(self) -> bool:
        return not self.errors

    def error(self, field_name: str, message: str) -> None:
        self.errors.append(Diagnostic(field_name, message, "error"))

    def warning(self, field_name: str, message: str) -> None:
        self.warnings.append(Diagnostic(field_name, message, "warning"))

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "valid": self.valid,
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
        }


@dataclass
class AuditEvent:
    """Record of a discovery or validation operation."""
    ts: datetime
    kind: str  # "detect", "list", "skip", "validate"
    skill: str
    path: str | None = None
    detail: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "ts": self.ts.isoformat(),
            "kind": self.kind,
            "skill": self.skill,
            "path": self.path,
            "detail": self.detail,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AuditEvent":
        """Deserialize from dict."""
        return cls(
            ts=datetime.fromisoformat(data["ts"]),
            kind=data["kind"],
            skill=data["skill"],
            path=data.get("path"),
            detail=data.get("detail", {}),
        )


@dataclass
class ScanPolicy:
    """Configuration for filesystem walks."""
    metadata_filename: str = METADATA_FILENAME
    name_depth: int = 3
    bundle_depth: int = 4
    pruned_dirs: frozenset[str] = DEFAULT_PRUNED_DIRS
    follow_symlinks: bool = True

    def __post_init__(self):
        if self.name_depth < 1 or self.bundle_depth < 1:
            raise ValueError("Depth bounds must be at least 1")
        self.pruned_dirs = frozenset(self.pruned_dirs)

    def to_dict(self) -> dict:
        """Serialize to JSON-compatible dict."""
        return {
            "metadata_filename": self.metadata_filename,
            "name_depth": self.name_depth,
            "bundle_depth": self.bundle_depth,
            "pruned_dirs": sorted(self.pruned_dirs),
            "follow_symlinks": self.follow_symlinks,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ScanPolicy":
        """Deserialize from dict."""
        return cls(
            metadata_filename=data.get("metadata_filename", METADATA_FILENAME),
            name_depth=data.get("name_depth", 3),
            bundle_depth=data.get("bundle_depth", 4),
            pruned_dirs=frozenset(data.get("pruned_dirs", DEFAULT_PRUNED_DIRS)),
            follow_symlinks=data.get("follow_symlinks", True),
        )
