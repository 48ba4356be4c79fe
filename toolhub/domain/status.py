from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from ..config import Settings

__all__ = [
    "ToolId",
    "ToolState",
    "ToolStatus",
]


class ToolId(str, Enum):
    word_count = "word-count"
    generate_uuid = "generate-uuid"
    ai_tool = "ai-tool"


class ToolState(str, Enum):
    online = "online"
    offline = "offline"


@dataclass(frozen=True)
class ToolStatus:
    """Online/offline flag per tool, fixed for the life of the process.

    Tools missing from `states` are treated as offline.
    """

    states: Mapping[ToolId, ToolState] = field(default_factory=dict)

    def __post_init__(self) -> None:
        frozen = MappingProxyType({ToolId(k): ToolState(v) for k, v in self.states.items()})
        object.__setattr__(self, "states", frozen)

    @classmethod
    def from_settings(cls, settings: Settings) -> ToolStatus:
        """Local tools are always online; the AI tool needs an API key."""
        return cls(
            {
                ToolId.word_count: ToolState.online,
                ToolId.generate_uuid: ToolState.online,
                ToolId.ai_tool: ToolState.online if settings.ai_enabled else ToolState.offline,
            }
        )

    def state_of(self, tool: ToolId) -> ToolState:
        return self.states.get(tool, ToolState.offline)

    def is_online(self, tool: ToolId) -> bool:
        return self.state_of(tool) is ToolState.online

    def as_dict(self) -> dict[str, dict[str, str]]:
        return {tool.value: {"status": self.state_of(tool).value} for tool in ToolId}
