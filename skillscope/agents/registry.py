"""Catalog of supported agent tools and their skill directory conventions.

Every other module reads path conventions from here. Supporting a new agent
tool means adding one entry to ``_ADAPTERS`` and, when the tool keeps its
skills under a shared or nested configuration directory, one entry to
``_PRESENCE_INDICATORS``.
"""

from types import MappingProxyType

from skillscope.exceptions import AdapterNotFoundError
from skillscope.models import AgentAdapter


def _adapter(id: str, display_name: str, project_path: str, global_path: str) -> AgentAdapter:
    return AgentAdapter(
        id=id,
        display_name=display_name,
        project_path=project_path,
        global_path=global_path,
    )


_ADAPTERS: tuple[AgentAdapter, ...] = (
    _adapter("amp", "Amp", ".agents/skills", ".config/agents/skills"),
    _adapter("antigravity", "Antigravity", ".agent/skills", ".gemini/antigravity/skills"),
    _adapter("augment", "Augment", ".augment/skills", ".augment/skills"),
    _adapter("claude-code", "Claude Code", ".claude/skills", ".claude/skills"),
    _adapter("cline", "Cline", ".cline/skills", ".cline/skills"),
    _adapter("codebuddy", "CodeBuddy", ".codebuddy/skills", ".codebuddy/skills"),
    _adapter("codex", "Codex", ".agents/skills", ".codex/skills"),
    _adapter("command-code", "Command Code", ".commandcode/skills", ".commandcode/skills"),
    _adapter("continue", "Continue", ".continue/skills", ".continue/skills"),
    _adapter("cortex", "Cortex", ".cortex/skills", ".snowflake/cortex/skills"),
    _adapter("crush", "Crush", ".crush/skills", ".config/crush/skills"),
    _adapter("cursor", "Cursor", ".agents/skills", ".cursor/skills"),
    _adapter("droid", "Droid", ".factory/skills", ".factory/skills"),
    _adapter("gemini-cli", "Gemini CLI", ".agents/skills", ".gemini/skills"),
    _adapter("github-copilot", "GitHub Copilot", ".agents/skills", ".copilot/skills"),
    _adapter("goose", "Goose", ".goose/skills", ".config/goose/skills"),
    _adapter("iflow-cli", "iFlow CLI", ".iflow/skills", ".iflow/skills"),
    _adapter("junie", "Junie", ".junie/skills", ".junie/skills"),
    _adapter("kilo", "Kilo Code", ".kilocode/skills", ".kilocode/skills"),
    _adapter("kimi-cli", "Kimi CLI", ".agents/skills", ".config/agents/skills"),
    _adapter("kiro-cli", "Kiro", ".kiro/skills", ".kiro/skills"),
    _adapter("kode", "Kode", ".kode/skills", ".kode/skills"),
    _adapter("mcpjam", "MCPJam", ".mcpjam/skills", ".mcpjam/skills"),
    _adapter("mistral-vibe", "Mistral Vibe", ".vibe/skills", ".vibe/skills"),
    _adapter("mux", "Mux", ".mux/skills", ".mux/skills"),
    _adapter("opencode", "OpenCode", ".agents/skills", ".config/opencode/skills"),
    _adapter("openhands", "OpenHands", ".openhands/skills", ".openhands/skills"),
    _adapter("pi", "Pi", ".pi/skills", ".pi/agent/skills"),
    _adapter("qoder", "Qoder", ".qoder/skills", ".qoder/skills"),
    _adapter("qwen-code", "Qwen Code", ".qwen/skills", ".qwen/skills"),
    _adapter("replit", "Replit", ".agents/skills", ".config/agents/skills"),
    _adapter("roo", "Roo Code", ".roo/skills", ".roo/skills"),
    _adapter("trae", "Trae", ".trae/skills", ".trae/skills"),
    _adapter("trae-cn", "Trae CN", ".trae/skills", ".trae-cn/skills"),
    _adapter("windsurf", "Windsurf", ".windsurf/skills", ".codeium/windsurf/skills"),
    _adapter("zencoder", "Zencoder", ".zencoder/skills", ".zencoder/skills"),
    _adapter("neovate", "Neovate", ".neovate/skills", ".neovate/skills"),
    _adapter("pochi", "Pochi", ".pochi/skills", ".pochi/skills"),
    _adapter("adal", "Adal", ".adal/skills", ".adal/skills"),
)

# Paths under the home directory whose existence means the tool is installed
# even though its global skill directory has not been created yet.
_PRESENCE_INDICATORS = MappingProxyType({
    "amp": (".config/agents",),
    "antigravity": (".gemini/antigravity",),
    "augment": (".augment",),
    "claude-code": (".claude",),
    "cline": (".cline",),
    "codebuddy": (".codebuddy",),
    "codex": (".codex",),
    "command-code": (".commandcode",),
    "continue": (".continue",),
    "cortex": (".snowflake/cortex",),
    "crush": (".config/crush",),
    "cursor": (".cursor",),
    "droid": (".factory",),
    "gemini-cli": (".gemini",),
    "github-copilot": (".copilot",),
    "goose": (".config/goose",),
    "iflow-cli": (".iflow",),
    "junie": (".junie",),
    "kilo": (".kilocode",),
    "kimi-cli": (".config/agents",),
    "kiro-cli": (".kiro",),
    "kode": (".kode",),
    "mcpjam": (".mcpjam",),
    "mistral-vibe": (".vibe",),
    "mux": (".mux",),
    "opencode": (".config/opencode",),
    "openhands": (".openhands",),
    "pi": (".pi",),
    "qoder": (".qoder",),
    "qwen-code": (".qwen",),
    "replit": (".config/agents",),
    "roo": (".roo",),
    "trae": (".trae",),
    "trae-cn": (".trae-cn",),
    "windsurf": (".codeium",),
    "zencoder": (".zencoder",),
    "neovate": (".neovate",),
    "pochi": (".pochi",),
    "adal": (".adal",),
})


def list_adapters() -> tuple[AgentAdapter, ...]:
    """Return every known adapter in catalog order."""
    return _ADAPTERS


def get_adapter(adapter_id: str) -> AgentAdapter:
    """Look up an adapter by id.

    Raises:
        AdapterNotFoundError: If no adapter has the given id
    """
    for adapter in _ADAPTERS:
        if adapter.id == adapter_id:
            return adapter
    raise AdapterNotFoundError(f"Unknown agent: {adapter_id}")


def presence_indicators(adapter_id: str) -> tuple[str, ...]:
    """Return home-relative paths that indicate the tool is installed.

    Unknown ids have no indicators.
    """
    return _PRESENCE_INDICATORS.get(adapter_id, ())
