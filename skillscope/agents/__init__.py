"""Agent adapter registry."""

from skillscope.agents.registry import get_adapter, list_adapters, presence_indicators

__all__ = ["get_adapter", "list_adapters", "presence_indicators"]
