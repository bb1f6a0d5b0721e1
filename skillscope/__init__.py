"""skillscope - Discovery, aggregation and validation of Agent Skills.

This library finds SKILL.md bundles installed for the coding agents it knows
about, both in each agent's global directory under the home directory and in
project directories below the configured scan roots. It merges copies that
several agents share and validates bundles against the Agent Skills naming
and size rules.
"""

from skillscope.agents import get_adapter, list_adapters, presence_indicators

from skillscope.exceptions import (
    SkillsError,
    HomeDirectoryError,
    AdapterNotFoundError,
    MalformedBundleError,
    UnreadableEntryError,
)

from skillscope.models import (
    AgentAdapter,
    AgentInfo,
    AuditEvent,
    Diagnostic,
    GlobalDiscovery,
    ProjectDiscovery,
    ScanPolicy,
    Scope,
    ScopeFilter,
    SkillBundle,
    ValidationResult,
)

from skillscope.observability import AuditSink, JSONLAuditSink, StdoutAuditSink
from skillscope.parsing import FrontmatterDocument, FrontmatterParser, render_skill_md, write_skill_md
from skillscope.runtime import SkillsRepository
from skillscope.validation import SkillValidator, validate

__version__ = "0.1.0"

__all__ = [
    # Registry
    "get_adapter",
    "list_adapters",
    "presence_indicators",
    # Exceptions
    "SkillsError",
    "HomeDirectoryError",
    "AdapterNotFoundError",
    "MalformedBundleError",
    "UnreadableEntryError",
    # Models
    "AgentAdapter",
    "AgentInfo",
    "AuditEvent",
    "Diagnostic",
    "GlobalDiscovery",
    "ProjectDiscovery",
    "ScanPolicy",
    "Scope",
    "ScopeFilter",
    "SkillBundle",
    "ValidationResult",
    # Parsing
    "FrontmatterDocument",
    "FrontmatterParser",
    "render_skill_md",
    "write_skill_md",
    # Validation
    "SkillValidator",
    "validate",
    # Runtime
    "SkillsRepository",
    # Observability
    "AuditSink",
    "JSONLAuditSink",
    "StdoutAuditSink",
]
