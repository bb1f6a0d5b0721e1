"""Skill indexing for discovered SKILL.md files."""

import logging
from datetime import datetime
from pathlib import Path

from skillscope.exceptions import MalformedBundleError, UnreadableEntryError
from skillscope.models import AuditEvent, Scope, SkillBundle
from skillscope.observability.audit import AuditSink
from skillscope.parsing.frontmatter import FrontmatterParser

logger = logging.getLogger(__name__)


class SkillIndexer:
    """Creates SkillBundle objects from discovered SKILL.md files.

    The indexer parses each file and builds a SkillBundle tagged with the
    scope and agent it was found for. Files that cannot be read or parsed
    are skipped with a warning so one broken bundle does not hide the rest.
    """

    def __init__(self, parser: FrontmatterParser | None = None, audit_sink: AuditSink | None = None):
        """Initialize the skill indexer.

        Args:
            parser: Frontmatter parser to use; a default one is created if None
            audit_sink: Optional sink that receives a "skip" event for every
                file that could not be indexed
        """
        self.parser = parser or FrontmatterParser()
        self.audit_sink = audit_sink

    def index_file(self, skill_file: Path, scope: Scope, agent_id: str | None = None) -> SkillBundle:
        """Create a SkillBundle from one SKILL.md file.

        A missing ``name`` falls back to the directory name and a missing
        ``description`` to an empty string.

        Args:
            skill_file: Path to the SKILL.md file
            scope: Scope to record on the bundle
            agent_id: Agent that discovered the file, if any

        Raises:
            UnreadableEntryError: If the file cannot be read
            MalformedBundleError: If the frontmatter cannot be parsed
        """
        document = self.parser.parse_file(skill_file)

        name = document.name
        if name is None:
            name = skill_file.parent.name

        return SkillBundle(
            name=name,
            description=document.description or "",
            install_path=str(skill_file),
            scope=scope,
            body=document.body,
            license=document.license,
            compatibility=document.compatibility,
            metadata=document.metadata,
            allowed_tools=document.allowed_tools,
            agents=[agent_id] if agent_id else [],
        )

    def index_files(self, skill_files: list[Path], scope: Scope, agent_id: str) -> list[SkillBundle]:
        """Index several SKILL.md files, skipping the ones that fail.

        Returns:
            Bundles for the files that could be parsed, in input order
        """
        bundles = []

        for skill_file in skill_files:
            try:
                bundles.append(self.index_file(skill_file, scope, agent_id))
            except (MalformedBundleError, UnreadableEntryError) as e:
                logger.warning("Skipping skill at %s: %s", skill_file, e)
                self._audit_skip(skill_file, agent_id, e)

        return bundles

    def _audit_skip(self, skill_file: Path, agent_id: str, error: Exception) -> None:
        if self.audit_sink is None:
            return
        self.audit_sink.log(AuditEvent(
            ts=datetime.now(),
            kind="skip",
            skill=skill_file.parent.name,
            path=str(skill_file),
            detail={"agent": agent_id, "error": str(error)},
        ))
