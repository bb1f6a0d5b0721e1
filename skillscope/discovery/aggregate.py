"""Merging of skill bundles discovered by several agents."""

from collections.abc import Iterable
from dataclasses import replace

from skillscope.models import SkillBundle


def merge_skills(bundles: Iterable[SkillBundle]) -> list[SkillBundle]:
    """Collapse bundles that share a scope and name into one.

    The same skill is often visible to several agents through different
    directories. For each ``(scope, name)`` the first bundle's fields are
    kept as they are; later duplicates only contribute agent ids that are
    not already listed. Input bundles are not modified.

    Returns:
        Merged bundles sorted by name (then scope)
    """
    merged: dict[tuple[str, str], SkillBundle] = {}

    for bundle in bundles:
        key = (bundle.scope.value, bundle.name)
        existing = merged.get(key)
        if existing is None:
            merged[key] = replace(bundle, agents=list(bundle.agents))
            continue
        for agent_id in bundle.agents:
            existing.add_agent(agent_id)

    return sorted(merged.values(), key=lambda bundle: (bundle.name, bundle.scope.value))
