"""Runtime module for the repository query facade."""

from skillscope.runtime.repository import SkillsRepository

__all__ = ["SkillsRepository"]
