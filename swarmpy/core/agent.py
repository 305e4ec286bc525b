"""
Agent definition: identity, instructions, actions and guardrails.

An Agent is built once and reused across runs. Its ``functions`` list may be
edited between runs; the dispatch map is rebuilt from it on every tool round.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Callable, Dict, List, Optional, Union

from ..config import DEFAULT_INSTRUCTIONS, get_settings
from ..guardrails import GuardrailConfig, InputValidator, OutputValidator, SafetyChecker, SafetyCheckResult, ValidationResult
from .actions import ActionLike, ActionRegistry, to_schema

logger = logging.getLogger(__name__)

Instructions = Union[str, Callable[[Dict[str, Any]], str]]


class Agent:
    def __init__(
        self,
        *,
        name: str = "Agent",
        model: Optional[str] = None,
        instructions: Instructions = DEFAULT_INSTRUCTIONS,
        functions: Optional[List[ActionLike]] = None,
        tool_choice: Optional[str] = None,
        guardrails: Optional[GuardrailConfig] = None,
        max_tokens: Optional[int] = None,
        parallel_tool_calls: bool = True,
    ):
        settings = get_settings()
        self.id = str(uuid.uuid4())
        self.name = name
        self.model = model or settings.default_model
        self.instructions = instructions
        self.functions: List[ActionLike] = list(functions or [])
        self.tool_choice = tool_choice
        self.guardrails = guardrails or GuardrailConfig()
        self.max_tokens = max_tokens if max_tokens is not None else settings.max_tokens
        self.parallel_tool_calls = parallel_tool_calls

    def get_instructions(self, context_variables: Optional[Dict[str, Any]] = None) -> str:
        """Render instructions, calling them with the context variables when callable."""
        if callable(self.instructions):
            return self.instructions(dict(context_variables or {}))
        return self.instructions

    def get_function_schemas(self) -> List[Dict[str, Any]]:
        return [to_schema(entry) for entry in self.functions]

    def action_registry(self) -> ActionRegistry:
        return ActionRegistry(self.functions)

    async def validate_input(self, text: str) -> ValidationResult:
        return await InputValidator(self.guardrails.input_validation).validate(text)

    async def validate_output(self, text: str) -> ValidationResult:
        return await OutputValidator(self.guardrails.output_validation).validate(text)

    async def check_safety(self, text: str) -> SafetyCheckResult:
        """Evaluate the configured safety checks. Acting on the issues is up to the caller."""
        return await SafetyChecker(self.guardrails.safety_checks).check(text)

    def __repr__(self) -> str:
        return f"Agent(name={self.name!r}, model={self.model!r})"
