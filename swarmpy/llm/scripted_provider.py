"""Scripted model provider for offline runs and tests.

Replays a queue of prepared turns without any network access. Each turn is
either an assistant message dict, a list of CompletionChunk objects (stream
only), or an exception to raise.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator, Dict, List, Optional, Union

from ..core.models import CompletionChunk, ToolCallDelta
from .base import BaseModelProvider, CompletionRequest, ProviderError

logger = logging.getLogger(__name__)

Turn = Union[Dict[str, Any], List[CompletionChunk], BaseException]


def assistant_message(content: Optional[str] = None, tool_calls: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = tool_calls
    return message


def tool_call(call_id: str, name: str, arguments: Union[str, Dict[str, Any], None] = None) -> Dict[str, Any]:
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, str):
        arguments = json.dumps(arguments)
    return {"id": call_id, "type": "function", "function": {"name": name, "arguments": arguments}}


def message_to_chunks(message: Dict[str, Any], fragment_size: int = 4) -> List[CompletionChunk]:
    """Split an assistant message into stream chunks, the way providers fragment output."""
    chunks: List[CompletionChunk] = []
    content = message.get("content") or ""
    for start in range(0, len(content), fragment_size):
        chunks.append(CompletionChunk(content=content[start:start + fragment_size]))
    for index, call in enumerate(message.get("tool_calls") or []):
        function = call.get("function") or {}
        arguments = function.get("arguments") or ""
        chunks.append(CompletionChunk(tool_calls=[ToolCallDelta(
            index=index,
            id=call.get("id"),
            type=call.get("type") or "function",
            name=function.get("name"),
        )]))
        for start in range(0, len(arguments), fragment_size):
            chunks.append(CompletionChunk(tool_calls=[ToolCallDelta(index=index, arguments=arguments[start:start + fragment_size])]))
    return chunks


class ScriptedProvider(BaseModelProvider):
    """Deterministic provider that replays prepared turns in order."""

    id = "scripted"

    def __init__(self, turns: Optional[List[Turn]] = None):
        self._turns: List[Turn] = list(turns or [])
        self.requests: List[CompletionRequest] = []

    def add_turn(self, turn: Turn) -> None:
        self._turns.append(turn)

    @property
    def call_count(self) -> int:
        return len(self.requests)

    def _next_turn(self, request: CompletionRequest) -> Turn:
        self.requests.append(request)
        if not self._turns:
            raise ProviderError("ScriptedProvider has no more turns")
        turn = self._turns.pop(0)
        if isinstance(turn, BaseException):
            raise turn
        return turn

    async def create_completion(self, request: CompletionRequest) -> Dict[str, Any]:
        turn = self._next_turn(request)
        if not isinstance(turn, dict):
            raise ProviderError("Scripted turn is a chunk list; use the streaming call")
        return dict(turn)

    async def create_completion_stream(self, request: CompletionRequest) -> AsyncIterator[CompletionChunk]:
        turn = self._next_turn(request)
        chunks = message_to_chunks(turn) if isinstance(turn, dict) else turn
        for chunk in chunks:
            if isinstance(chunk, BaseException):
                raise chunk
            yield chunk
