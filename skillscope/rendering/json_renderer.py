"""JSON renderer for skillscope query results."""

import json
from pathlib import Path


def _to_jsonable(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, dict):
        return {key: _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


class JSONRenderer:
    """Renders models, lists of models and path mappings as JSON.

    Anything with a ``to_dict()`` method is serialized through it; paths
    become strings.
    """

    def render(self, value, include_body: bool = True) -> str:
        """Render a query result as indented JSON.

        Args:
            value: A model, a list of models, or a dict of such values
            include_body: Whether to keep the ``body`` of skill bundles;
                listings are much shorter without it

        Returns:
            JSON string

        Example:
            >>> renderer = JSONRenderer()
            >>> print(renderer.render({"global": [Path("/home/me/.claude/skills")]}))
            {
              "global": [
                "/home/me/.claude/skills"
              ]
            }
        """
        data = _to_jsonable(value)

        if not include_body:
            items = data if isinstance(data, list) else [data]
            for item in items:
                if isinstance(item, dict):
                    item.pop("body", None)

        # Use indent=2 for readable formatting
        return json.dumps(data, indent=2, ensure_ascii=False)
