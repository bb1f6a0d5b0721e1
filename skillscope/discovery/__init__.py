"""Discovery module for skill scanning, indexing and merging."""

from skillscope.discovery.aggregate import merge_skills
from skillscope.discovery.index import SkillIndexer
from skillscope.discovery.scanner import SkillScanner

__all__ = ["SkillScanner", "SkillIndexer", "merge_skills"]
