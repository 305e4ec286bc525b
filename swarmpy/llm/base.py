from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Dict, List, Optional

from ..core.models import CompletionChunk


class ProviderNotConfigured(Exception):
    """The model provider cannot be used yet, typically because OPENAI_API_KEY is unset."""


class ProviderError(Exception):
    """The model backend failed; propagated to the caller of a batched run."""


def get_openai_token_param(model_name: str, max_tokens: int) -> dict:
    """
    Get the correct token parameter for chat completion calls based on model family.

    Reasoning-era families (gpt-5, o1) reject max_tokens and expect max_completion_tokens.
    """
    name = (model_name or "").lower()
    if "gpt-5" in name or name.startswith("o1"):
        return {"max_completion_tokens": max_tokens}
    return {"max_tokens": max_tokens}


@dataclass
class CompletionRequest:
    model: str
    messages: List[Dict[str, Any]]
    tools: List[Dict[str, Any]] = field(default_factory=list)
    tool_choice: Optional[str] = None
    max_tokens: Optional[int] = None
    parallel_tool_calls: Optional[bool] = None
    stream: bool = False

    def to_params(self) -> Dict[str, Any]:
        """Build OpenAI-compatible chat.completions kwargs.

        Tool-related keys are only sent when tools are present; providers reject
        tool_choice/parallel_tool_calls without tools.
        """
        params: Dict[str, Any] = {"model": self.model, "messages": self.messages}
        if self.tools:
            params["tools"] = self.tools
            if self.tool_choice:
                params["tool_choice"] = self.tool_choice
            if self.parallel_tool_calls is not None:
                params["parallel_tool_calls"] = self.parallel_tool_calls
        if self.max_tokens is not None:
            params.update(get_openai_token_param(self.model, self.max_tokens))
        if self.stream:
            params["stream"] = True
        return params


class BaseModelProvider(ABC):
    """Backend boundary used by Swarm for every model call.

    Both calls receive the fully rendered request; neither may mutate its messages.
    """

    id: str = "base"

    @abstractmethod
    async def create_completion(self, request: CompletionRequest) -> Dict[str, Any]:
        """Return one assistant message dict: {"role", "content", "tool_calls"}."""
        raise NotImplementedError

    @abstractmethod
    def create_completion_stream(self, request: CompletionRequest) -> AsyncIterator[CompletionChunk]:
        """Return an async iterator of incremental chunks, closed by the provider."""
        raise NotImplementedError
