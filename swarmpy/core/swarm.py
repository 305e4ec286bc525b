"""
Swarm: the turn-based orchestration loop.

One run alternates between a model call and a round of tool execution until the
model stops requesting tools, a round produces no hand-off, tool execution is
disabled, or ``max_turns`` tool rounds have been executed. The batched and the
streamed modes share every step except how the assistant message is obtained.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator, Awaitable, Dict, List, Optional, Union

from ..config import get_settings
from ..exceptions import InputValidationError, OutputValidationFailure
from ..llm.base import BaseModelProvider, CompletionRequest, ProviderError, ProviderNotConfigured
from ..tracing import TraceEventType, Tracer
from ..utils.logging import truncate_text
from .agent import Agent
from .dispatch import ActionDispatcher, DispatchOutcome
from .models import CompletionChunk, Response, Role, StreamEvent, StreamEventType
from .streaming import ToolCallAccumulator

logger = logging.getLogger(__name__)

INSTRUCTIONS_PREVIEW = 200
CONTENT_PREVIEW = 100


def _message_text(content: Any) -> str:
    """Plain text of a message content (string or list of typed parts)."""
    if content is None:
        return ""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, dict) and part.get("type") == "text":
                parts.append(str(part.get("text", "")))
            elif isinstance(part, str):
                parts.append(part)
        return " ".join(p for p in parts if p)
    return str(content)


@dataclass
class ConversationState:
    """Transient state of one run. Never shared between runs."""
    agent: Agent
    messages: List[Dict[str, Any]]
    context_variables: Dict[str, Any]
    tracer: Tracer
    turns: int = 0
    validation_errors: List[str] = field(default_factory=list)
    output_failures: List[OutputValidationFailure] = field(default_factory=list)


class Swarm:
    """Runs conversations between a caller and a changing active agent.

    A Swarm holds only its model provider and the tracing flag. Every run gets
    its own conversation state and tracer, so one instance can serve several
    concurrent runs.

    Parameters:
        model_provider (BaseModelProvider, optional): Backend for completions.
            Defaults to an OpenAIProvider configured from the environment.
        enable_tracing (bool, optional): Record trace events. Defaults to
            SWARM_ENABLE_TRACING.
    """

    def __init__(
        self,
        model_provider: Optional[BaseModelProvider] = None,
        enable_tracing: Optional[bool] = None,
    ):
        if model_provider is None:
            from ..llm.openai_provider import OpenAIProvider
            model_provider = OpenAIProvider()
        self.model_provider = model_provider
        self.enable_tracing = get_settings().enable_tracing if enable_tracing is None else enable_tracing
        # Tracer of the most recent run; each run records into its own tracer
        self.tracer = Tracer(self.enable_tracing)

    def run(
        self,
        agent: Agent,
        messages: List[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]] = None,
        stream: bool = False,
        max_turns: Union[int, float] = float("inf"),
        execute_tools: bool = True,
        model_override: Optional[str] = None,
        debug: bool = False,
    ) -> Union[Awaitable[Response], AsyncGenerator[StreamEvent, None]]:
        """Run a conversation.

        Returns an awaitable Response, or with ``stream=True`` an async generator
        of StreamEvent objects ending in a ``complete`` event.
        """
        if stream:
            return self.run_stream(agent, messages, context_variables, max_turns, execute_tools, model_override, debug)
        return self.run_batched(agent, messages, context_variables, max_turns, execute_tools, model_override, debug)

    async def run_batched(
        self,
        agent: Agent,
        messages: List[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]] = None,
        max_turns: Union[int, float] = float("inf"),
        execute_tools: bool = True,
        model_override: Optional[str] = None,
        debug: bool = False,
    ) -> Response:
        """Run the loop to completion and return the final Response.

        Raises InputValidationError when a user message fails the active agent's
        input rules, ProviderError when the backend fails, and SerializationError
        when an action returns a value that cannot be turned into text.
        """
        state = self._start(agent, messages, context_variables, debug)

        while state.turns < max_turns:
            await self._check_input(state)

            request = self._build_request(state, model_override, stream=False)
            self._trace_model_call(state, request.model)
            message = await self._complete(request)

            content = message.get("content")
            tool_calls = list(message.get("tool_calls") or [])

            if content:
                await self._check_output(state, _message_text(content))

            state.messages.append(self._assistant_message(content, tool_calls))

            if not (tool_calls and execute_tools):
                break

            state.turns += 1
            outcome = await self._dispatch(state, tool_calls, debug)
            state.messages.extend(outcome.messages)
            if not self._apply_outcome(state, outcome, debug):
                break

        return self._finish(state)

    async def run_stream(
        self,
        agent: Agent,
        messages: List[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]] = None,
        max_turns: Union[int, float] = float("inf"),
        execute_tools: bool = True,
        model_override: Optional[str] = None,
        debug: bool = False,
    ) -> AsyncGenerator[StreamEvent, None]:
        """Streamed variant of the loop.

        An input validation failure of the starting agent raises before any event
        is produced. Once events have been emitted, that failure (after a
        hand-off) and any other error inside a turn are reported as an ``error``
        event, followed by the terminal ``complete`` event.
        """
        state = self._start(agent, messages, context_variables, debug)
        emitted = False

        while state.turns < max_turns:
            try:
                await self._check_input(state)
            except InputValidationError as e:
                if not emitted:
                    raise
                # rejected by a hand-off target after events went out
                yield StreamEvent(StreamEventType.ERROR, {"error": str(e)})
                break

            yield StreamEvent(StreamEventType.STREAM_START, {"agent": state.agent.name})
            emitted = True

            try:
                request = self._build_request(state, model_override, stream=True)
                self._trace_model_call(state, request.model)

                content_parts: List[str] = []
                accumulator = ToolCallAccumulator()
                async for chunk in self._stream(request):
                    if chunk.content:
                        content_parts.append(chunk.content)
                        yield StreamEvent(StreamEventType.CONTENT, {"content": chunk.content})
                    for delta in chunk.tool_calls:
                        snapshot = accumulator.add(delta)
                        if accumulator.has_name(delta.index):
                            yield StreamEvent(StreamEventType.TOOL_CALL, {"tool_call": snapshot})

                content = "".join(content_parts)
                tool_calls = accumulator.tool_calls()
                state.messages.append(self._assistant_message(content, tool_calls))
                yield StreamEvent(StreamEventType.STREAM_END, {"messages": list(state.messages)})

                if content:
                    result = await self._check_output(state, content)
                    if not result.valid:
                        yield StreamEvent(StreamEventType.VALIDATION_FAILED, {"errors": result.errors})

                if tool_calls and execute_tools:
                    state.turns += 1
                    outcome = await self._dispatch(state, tool_calls, debug)
                    for tool_msg in outcome.messages:
                        state.messages.append(tool_msg)
                        yield StreamEvent(StreamEventType.TOOL_RESPONSE, {"message": tool_msg})

                    previous = state.agent
                    if self._apply_outcome(state, outcome, debug):
                        yield StreamEvent(
                            StreamEventType.HANDOFF,
                            {"from": previous.name, "to": state.agent.name},
                        )
                        continue
                break
            except Exception as e:
                logger.error(f"Streaming run failed for agent {state.agent.name}: {e}")
                yield StreamEvent(StreamEventType.ERROR, {"error": str(e)})
                break

        yield StreamEvent(StreamEventType.COMPLETE, {"response": self._finish(state)})

    # ------------------------------------------------------------------
    # Loop steps shared by both modes
    # ------------------------------------------------------------------

    def _start(
        self,
        agent: Agent,
        messages: List[Dict[str, Any]],
        context_variables: Optional[Dict[str, Any]],
        debug: bool,
    ) -> ConversationState:
        tracer = Tracer(self.enable_tracing)
        self.tracer = tracer
        state = ConversationState(
            agent=agent,
            messages=list(messages or []),
            context_variables=dict(context_variables or {}),
            tracer=tracer,
        )

        instructions = agent.get_instructions(state.context_variables)
        if not state.messages or state.messages[0].get("role") != Role.system.value:
            state.messages.insert(0, {"role": Role.system.value, "content": instructions})

        tracer.add_event(
            TraceEventType.AGENT_START,
            {"agent": agent.name, "instructions": truncate_text(instructions, INSTRUCTIONS_PREVIEW)},
        )
        logger.info(f"Starting run with agent {agent.name}")
        if debug:
            logger.info(f"[DEBUG] Instructions: {truncate_text(instructions, CONTENT_PREVIEW)}")
        return state

    async def _check_input(self, state: ConversationState) -> None:
        for message in state.messages:
            if message.get("role") != Role.user.value or not message.get("content"):
                continue
            result = await state.agent.validate_input(_message_text(message["content"]))
            if not result.valid:
                state.tracer.add_event(
                    TraceEventType.GUARDRAIL_CHECK,
                    {"type": "input_validation", "success": False, "errors": result.errors},
                )
                logger.error(f"Input rejected by agent {state.agent.name}: {result.errors}")
                raise InputValidationError(result.errors, agent_name=state.agent.name)
            state.tracer.add_event(TraceEventType.GUARDRAIL_CHECK, {"type": "input_validation", "success": True})

    async def _check_output(self, state: ConversationState, content: str):
        result = await state.agent.validate_output(content)
        if result.valid:
            state.tracer.add_event(TraceEventType.GUARDRAIL_CHECK, {"type": "output_validation", "success": True})
        else:
            state.tracer.add_event(
                TraceEventType.GUARDRAIL_CHECK,
                {"type": "output_validation", "success": False, "errors": result.errors},
            )
            failure = OutputValidationFailure(result.errors, agent_name=state.agent.name)
            state.validation_errors.extend(failure.errors)
            state.output_failures.append(failure)
            logger.warning(f"Agent {state.agent.name}: {failure}")
        return result

    def _build_request(self, state: ConversationState, model_override: Optional[str], stream: bool) -> CompletionRequest:
        agent = state.agent
        instructions = agent.get_instructions(state.context_variables)
        history = state.messages[1:] if state.messages and state.messages[0].get("role") == Role.system.value else state.messages
        tools = agent.get_function_schemas()
        return CompletionRequest(
            model=model_override or agent.model,
            messages=[{"role": Role.system.value, "content": instructions}, *history],
            tools=tools,
            tool_choice=agent.tool_choice,
            max_tokens=agent.max_tokens,
            parallel_tool_calls=agent.parallel_tool_calls if tools else None,
            stream=stream,
        )

    def _trace_model_call(self, state: ConversationState, model: str) -> None:
        state.tracer.add_event(
            TraceEventType.MODEL_CALL,
            {
                "model": model,
                "messages": [
                    {
                        "role": m.get("role"),
                        "content": truncate_text(_message_text(m.get("content")), CONTENT_PREVIEW) if m.get("content") else None,
                    }
                    for m in state.messages
                ],
            },
        )

    async def _complete(self, request: CompletionRequest) -> Dict[str, Any]:
        try:
            message = await self.model_provider.create_completion(request)
        except (ProviderError, ProviderNotConfigured):
            raise
        except Exception as e:
            raise ProviderError(str(e)) from e
        if not isinstance(message, dict):
            raise ProviderError(f"Provider returned {type(message).__name__}, expected a message dict")
        return message

    async def _stream(self, request: CompletionRequest) -> AsyncGenerator[CompletionChunk, None]:
        async for chunk in self.model_provider.create_completion_stream(request):
            logger.debug(f"Stream chunk: {chunk}")
            yield chunk

    @staticmethod
    def _assistant_message(content: Any, tool_calls: List[Dict[str, Any]]) -> Dict[str, Any]:
        message: Dict[str, Any] = {"role": Role.assistant.value, "content": content}
        if tool_calls:
            message["tool_calls"] = tool_calls
        return message

    async def _dispatch(self, state: ConversationState, tool_calls: List[Dict[str, Any]], debug: bool) -> DispatchOutcome:
        dispatcher = ActionDispatcher(state.tracer, debug=debug)
        return await dispatcher.handle_tool_calls(tool_calls, state.agent.action_registry(), state.context_variables)

    def _apply_outcome(self, state: ConversationState, outcome: DispatchOutcome, debug: bool) -> bool:
        """Merge the batch's context delta and apply a hand-off. Returns True on hand-off."""
        state.context_variables = {**state.context_variables, **outcome.context_variables}
        if outcome.agent is None:
            return False

        state.tracer.add_event(
            TraceEventType.HANDOFF,
            {"from": state.agent.name, "to": outcome.agent.name, "context_update": outcome.context_variables},
        )
        logger.info(f"Handoff from {state.agent.name} to {outcome.agent.name}")
        if debug:
            logger.info(f"[DEBUG] Context update: {outcome.context_variables}")
        state.agent = outcome.agent
        return True

    def _finish(self, state: ConversationState) -> Response:
        state.tracer.add_event(TraceEventType.AGENT_END, {"agent": state.agent.name})
        logger.info(f"Run finished with agent {state.agent.name} after {state.turns} tool round(s)")
        return Response(
            messages=state.messages,
            agent=state.agent,
            context_variables=state.context_variables,
            trace=state.tracer.get_events(),
            validation_errors=list(state.validation_errors),
            output_failures=list(state.output_failures),
        )
