from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ..exceptions import OutputValidationFailure
    from ..tracing import TraceEvent
    from .agent import Agent


class Role(str, Enum):
    system = "system"
    user = "user"
    assistant = "assistant"
    tool = "tool"


@dataclass
class Message:
    role: Role
    content: Optional[str] = None
    name: Optional[str] = None
    tool_call_id: Optional[str] = None
    tool_calls: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Render as an OpenAI-compatible message dict, omitting unset fields."""
        out: Dict[str, Any] = {"role": Role(self.role).value, "content": self.content}
        if self.name is not None:
            out["name"] = self.name
        if self.tool_call_id is not None:
            out["tool_call_id"] = self.tool_call_id
        if self.tool_calls:
            out["tool_calls"] = [dict(tc) for tc in self.tool_calls]
        return out


@dataclass
class ToolCall:
    id: str
    name: str
    arguments: str = ""
    type: str = "function"

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ToolCall":
        function = data.get("function") or {}
        return cls(
            id=data.get("id") or "",
            name=function.get("name") or "",
            arguments=function.get("arguments") or "",
            type=data.get("type") or "function",
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type,
            "function": {"name": self.name, "arguments": self.arguments},
        }


@dataclass
class ToolCallDelta:
    """One incremental fragment of a streamed tool call, addressed by slot index."""
    index: int
    id: Optional[str] = None
    type: Optional[str] = None
    name: Optional[str] = None
    arguments: Optional[str] = None


@dataclass
class CompletionChunk:
    content: Optional[str] = None
    tool_calls: List[ToolCallDelta] = field(default_factory=list)


@dataclass
class Response:
    """Final state of one orchestration run."""
    messages: List[Dict[str, Any]]
    agent: "Agent"
    context_variables: Dict[str, Any]
    trace: List["TraceEvent"] = field(default_factory=list)
    validation_errors: List[str] = field(default_factory=list)
    output_failures: List["OutputValidationFailure"] = field(default_factory=list)


class StreamEventType(str, Enum):
    STREAM_START = "stream_start"
    CONTENT = "content"
    TOOL_CALL = "tool_call"
    STREAM_END = "stream_end"
    VALIDATION_FAILED = "validation_failed"
    TOOL_RESPONSE = "tool_response"
    HANDOFF = "handoff"
    ERROR = "error"
    COMPLETE = "complete"


@dataclass
class StreamEvent:
    type: StreamEventType
    data: Dict[str, Any] = field(default_factory=dict)
