"""
Execution of model-requested tool calls against an agent's actions.

Failures of a single call (unknown action, malformed arguments, an action that
raises) become tool-result messages and never abort the batch. The one fatal
case is a return value that cannot be turned into text.
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..exceptions import (
    ActionArgumentError,
    ActionError,
    ActionExecutionError,
    ActionNotFound,
    SerializationError,
    UnsupportedToolCall,
)
from ..tracing import TraceEventType, Tracer
from ..utils.logging import safe_repr
from .actions import ActionRegistry
from .agent import Agent
from .models import Role, ToolCall
from .result import Result

logger = logging.getLogger(__name__)


@dataclass
class DispatchOutcome:
    messages: List[Dict[str, Any]] = field(default_factory=list)
    agent: Optional[Agent] = None
    context_variables: Dict[str, Any] = field(default_factory=dict)


def parse_arguments(action_name: str, raw: str) -> Dict[str, Any]:
    try:
        parsed = json.loads(raw) if raw and raw.strip() else {}
    except json.JSONDecodeError as e:
        raise ActionArgumentError(action_name, str(e)) from e
    if not isinstance(parsed, dict):
        raise ActionArgumentError(action_name, f"expected a JSON object, got {type(parsed).__name__}")
    return parsed


def to_result(action_name: str, raw: Any) -> Result:
    """Normalize any action return value into a Result.

    A bare Agent is an implicit hand-off with no text. Anything else is coerced
    with str(); failure to do so is a SerializationError.
    """
    if isinstance(raw, Agent):
        result = Result(agent=raw)
    elif isinstance(raw, Result):
        result = Result(value=raw.value, agent=raw.agent, context_variables=dict(raw.context_variables or {}))
    else:
        result = Result(value=raw)
    if result.value is None:
        result.value = ""
    elif not isinstance(result.value, str):
        try:
            result.value = str(result.value)
        except Exception as e:
            raise SerializationError(action_name, e) from e
    return result


def serialize_for_trace(raw: Any) -> Any:
    if isinstance(raw, Agent):
        return {"agent": raw.name}
    if isinstance(raw, Result):
        return {
            "value": raw.value if raw.value is None or isinstance(raw.value, str) else safe_repr(raw.value),
            "agent": raw.agent.name if raw.agent else None,
            "context_variables": raw.context_variables,
        }
    try:
        return str(raw)
    except Exception:
        return safe_repr(raw)


def tool_message(name: str, tool_call_id: str, content: str) -> Dict[str, Any]:
    return {
        "role": Role.tool.value,
        "content": content,
        "name": name,
        "tool_call_id": tool_call_id,
    }


class ActionDispatcher:
    """Runs one batch of tool calls in input order, tracing every step."""

    def __init__(self, tracer: Tracer, debug: bool = False):
        self.tracer = tracer
        self.debug = debug

    async def handle_tool_calls(
        self,
        tool_calls: List[Dict[str, Any]],
        registry: ActionRegistry,
        context_variables: Dict[str, Any],
    ) -> DispatchOutcome:
        outcome = DispatchOutcome()
        # each call sees the deltas of the calls before it
        current = dict(context_variables)

        for raw_call in tool_calls:
            call = ToolCall.from_dict(raw_call)
            self.tracer.add_event(TraceEventType.FUNCTION_CALL, {"name": call.name, "arguments": call.arguments})
            if self.debug:
                logger.info(f"[DEBUG] Calling action {call.name} with {safe_repr(call.arguments)}")

            try:
                raw_result = await self._invoke(call, registry, current)
            except ActionError as e:
                logger.warning(str(e))
                self.tracer.add_event(TraceEventType.FUNCTION_RETURN, {"name": call.name, "error": str(e)})
                outcome.messages.append(tool_message(call.name, call.id, str(e)))
                continue

            self.tracer.add_event(
                TraceEventType.FUNCTION_RETURN,
                {"name": call.name, "result": serialize_for_trace(raw_result)},
            )
            result = to_result(call.name, raw_result)
            logger.info(f"Action {call.name} returned {safe_repr(result.value)}")

            outcome.messages.append(tool_message(call.name, call.id, result.value))
            if result.context_variables:
                outcome.context_variables.update(result.context_variables)
                current.update(result.context_variables)
            if result.agent is not None:
                outcome.agent = result.agent

        return outcome

    async def _invoke(self, call: ToolCall, registry: ActionRegistry, context_variables: Dict[str, Any]) -> Any:
        if call.type != "function":
            raise UnsupportedToolCall(call.name, call.type)
        act = registry.get(call.name)
        if act is None:
            raise ActionNotFound(call.name)
        arguments = parse_arguments(call.name, call.arguments)
        logger.info(f"Dispatching action {call.name} with {safe_repr(arguments)}")
        try:
            value = act.invoke(dict(context_variables), arguments)
            if inspect.isawaitable(value):
                value = await value
        except Exception as e:
            logger.error(f"Action {call.name} raised: {e}")
            raise ActionExecutionError(call.name, str(e)) from e
        return value
