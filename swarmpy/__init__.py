"""
swarmpy: multi-agent orchestration over a chat-completion model provider.

Agents carry instructions, actions and guardrails; a Swarm runs the
conversation loop, dispatches tool calls, applies hand-offs between agents
and records a trace of every step.
"""

from .core.models import (
    CompletionChunk,
    Message,
    Response,
    Role,
    StreamEvent,
    StreamEventType,
    ToolCall,
    ToolCallDelta,
)
from .llm.base import BaseModelProvider, CompletionRequest, ProviderError, ProviderNotConfigured
from .llm.openai_provider import OpenAIProvider
from .llm.scripted_provider import ScriptedProvider
from .exceptions import (
    ActionArgumentError,
    ActionExecutionError,
    ActionNotFound,
    InputValidationError,
    OutputValidationFailure,
    SerializationError,
    SwarmError,
    UnsupportedToolCall,
)
from .guardrails import (
    BuiltInRules,
    GuardrailConfig,
    InputValidationRule,
    InputValidator,
    OutputValidationRule,
    OutputValidator,
    SafetyChecker,
    SafetyCheckRule,
    ValidationResult,
    ValidationRule,
)
from .tracing import (
    TraceEvent,
    TraceEventType,
    Tracer,
    export_trace_json,
    load_trace_from_file,
    parse_trace_json,
    save_trace_to_file,
)
from .core.actions import Action, ActionParameter, ActionRegistry, action
from .core.result import Result
from .core.agent import Agent
from .core.handoff import HandoffCondition, create_conditional_handoff, create_handoff
from .core.swarm import Swarm

__version__ = "0.1.0"

__all__ = [
    "Action",
    "ActionArgumentError",
    "ActionExecutionError",
    "ActionNotFound",
    "ActionParameter",
    "ActionRegistry",
    "Agent",
    "BaseModelProvider",
    "BuiltInRules",
    "CompletionChunk",
    "CompletionRequest",
    "GuardrailConfig",
    "HandoffCondition",
    "InputValidationError",
    "InputValidationRule",
    "InputValidator",
    "Message",
    "OpenAIProvider",
    "OutputValidationFailure",
    "OutputValidationRule",
    "OutputValidator",
    "ProviderError",
    "ProviderNotConfigured",
    "Response",
    "Result",
    "Role",
    "SafetyCheckRule",
    "SafetyChecker",
    "ScriptedProvider",
    "SerializationError",
    "StreamEvent",
    "StreamEventType",
    "Swarm",
    "SwarmError",
    "ToolCall",
    "ToolCallDelta",
    "TraceEvent",
    "TraceEventType",
    "Tracer",
    "ValidationResult",
    "UnsupportedToolCall",
    "ValidationRule",
    "action",
    "create_conditional_handoff",
    "create_handoff",
    "export_trace_json",
    "load_trace_from_file",
    "parse_trace_json",
    "save_trace_to_file",
]
