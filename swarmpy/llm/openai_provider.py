from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Dict, List, Optional

from openai import AsyncOpenAI, OpenAIError

from ..config import get_openai_client
from ..core.models import CompletionChunk, ToolCallDelta
from .base import BaseModelProvider, CompletionRequest, ProviderError, ProviderNotConfigured

logger = logging.getLogger(__name__)


def _tool_calls_to_dicts(tool_calls: Any) -> List[Dict[str, Any]]:
    out: List[Dict[str, Any]] = []
    for tc in tool_calls or []:
        function = getattr(tc, "function", None)
        out.append({
            "id": getattr(tc, "id", "") or "",
            "type": getattr(tc, "type", None) or "function",
            "function": {
                "name": getattr(function, "name", "") or "",
                "arguments": getattr(function, "arguments", "") or "",
            },
        })
    return out


class OpenAIProvider(BaseModelProvider):
    """Adapter over the OpenAI-compatible async client.

    The client is created lazily so that constructing a Swarm never requires
    credentials until the first backend call.
    """

    id = "openai"

    def __init__(self, client: Optional[AsyncOpenAI] = None) -> None:
        self._client = client

    @property
    def client(self) -> AsyncOpenAI:
        if self._client is None:
            try:
                self._client = get_openai_client()
            except ValueError as e:
                # Normalize to ProviderNotConfigured for runtime consistency
                raise ProviderNotConfigured(str(e)) from e
        return self._client

    async def create_completion(self, request: CompletionRequest) -> Dict[str, Any]:
        params = request.to_params()
        params.pop("stream", None)
        try:
            completion = await self.client.chat.completions.create(**params)
        except OpenAIError as e:
            logger.error(f"OpenAIProvider: completion request failed: {e}")
            raise ProviderError(str(e)) from e

        if not completion.choices:
            raise ProviderError("Provider returned no choices")
        message = completion.choices[0].message
        result: Dict[str, Any] = {"role": "assistant", "content": message.content}
        tool_calls = _tool_calls_to_dicts(message.tool_calls)
        if tool_calls:
            result["tool_calls"] = tool_calls
        return result

    async def create_completion_stream(self, request: CompletionRequest) -> AsyncIterator[CompletionChunk]:
        params = request.to_params()
        params["stream"] = True
        try:
            stream = await self.client.chat.completions.create(**params)
            logger.info("Starting OpenAI stream iteration")
            async for chunk in stream:
                if not chunk.choices:
                    continue
                delta = chunk.choices[0].delta
                deltas: List[ToolCallDelta] = []
                for tc in getattr(delta, "tool_calls", None) or []:
                    function = getattr(tc, "function", None)
                    deltas.append(ToolCallDelta(
                        index=tc.index,
                        id=tc.id,
                        type=tc.type,
                        name=getattr(function, "name", None),
                        arguments=getattr(function, "arguments", None),
                    ))
                if delta.content is None and not deltas:
                    continue
                yield CompletionChunk(content=delta.content, tool_calls=deltas)
        except OpenAIError as e:
            logger.error(f"OpenAIProvider: stream failed: {e}")
            raise ProviderError(str(e)) from e
