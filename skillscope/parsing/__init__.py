"""Parsing module for SKILL.md frontmatter and body."""

from skillscope.parsing.frontmatter import FrontmatterDocument, FrontmatterParser
from skillscope.parsing.writer import render_skill_md, write_skill_md

__all__ = ["FrontmatterDocument", "FrontmatterParser", "render_skill_md", "write_skill_md"]
