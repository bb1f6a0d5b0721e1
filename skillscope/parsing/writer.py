"""Serialization of flattened frontmatter fields back into SKILL.md text."""

from pathlib import Path

import yaml

from skillscope.exceptions import SkillsError
from skillscope.parsing.frontmatter import DELIMITER

_REQUIRED_KEYS = ("name", "description")
_OPTIONAL_KEYS = ("license", "compatibility", "allowed-tools")
_KEY_ALIASES = {"allowed_tools": "allowed-tools"}


def _nest_fields(fields: dict[str, str]) -> dict:
    """Rebuild the nested mapping that ``flatten_fields`` produced.

    Key order: name, description, the known optional keys, remaining plain
    keys sorted, then dotted groups with ``metadata`` first.
    """
    plain: dict[str, str] = {}
    groups: dict[str, dict[str, str]] = {}

    for key, value in fields.items():
        key = _KEY_ALIASES.get(key, key)
        if "." in key:
            parent, child = key.split(".", 1)
            if value:
                groups.setdefault(parent, {})[child] = value
        else:
            plain[key] = value

    document: dict = {}
    for key in _REQUIRED_KEYS:
        if key in plain:
            document[key] = plain.pop(key)
    for key in _OPTIONAL_KEYS:
        value = plain.pop(key, None)
        if value:
            document[key] = value
    for key in sorted(plain):
        if plain[key]:
            document[key] = plain[key]

    group_order = sorted(groups, key=lambda parent: (parent != "metadata", parent))
    for parent in group_order:
        document[parent] = dict(sorted(groups[parent].items()))

    return document


def render_skill_md(fields: dict[str, str], body: str) -> str:
    """
    Render flattened fields and a body as SKILL.md text.

    Nested groups are written as two-space-indented mappings under their
    parent key. Values are emitted by PyYAML so strings that look like
    booleans, numbers, or contain ':' are quoted.

    Example:
        >>> print(render_skill_md({"name": "demo", "metadata.author": "me"}, "Hi"))
        ---
        name: demo
        metadata:
          author: me
        ---
        <BLANKLINE>
        Hi
    """
    document = _nest_fields(fields)

    if document:
        frontmatter_text = yaml.safe_dump(
            document,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            width=float("inf"),
        )
    else:
        frontmatter_text = ""

    return f"{DELIMITER}\n{frontmatter_text}{DELIMITER}\n\n{body}"


def write_skill_md(path: Path, fields: dict[str, str], body: str) -> None:
    """
    Write a SKILL.md file, creating parent directories as needed.

    Raises:
        SkillsError: If the directory or file cannot be written
    """
    path = Path(path)
    content = render_skill_md(fields, body)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    except OSError as e:
        raise SkillsError(f"Failed to write {path}: {e}")
