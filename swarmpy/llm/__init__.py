"""Model provider boundary: request shape, provider contract, the OpenAI adapter and a scripted offline provider."""

from .base import (
    BaseModelProvider,
    CompletionRequest,
    ProviderError,
    ProviderNotConfigured,
    get_openai_token_param,
)
from .openai_provider import OpenAIProvider
from .scripted_provider import ScriptedProvider, assistant_message, tool_call

__all__ = [
    "BaseModelProvider",
    "CompletionRequest",
    "ProviderError",
    "ProviderNotConfigured",
    "get_openai_token_param",
    "OpenAIProvider",
    "ScriptedProvider",
    "assistant_message",
    "tool_call",
]
