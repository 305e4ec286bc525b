"""
Exceptions raised by the swarm orchestration loop
"""

from typing import List, Optional

from .llm.base import ProviderError, ProviderNotConfigured


class SwarmError(Exception):
    """Base exception for all orchestration errors."""
    pass


class InputValidationError(SwarmError):
    """A user message failed the active agent's input rules. Fatal to the run."""

    def __init__(self, errors: List[str], agent_name: Optional[str] = None):
        """
        Parameters:
            errors (List[str]): Error messages of every failed rule.
            agent_name (str, optional): Name of the agent whose rules rejected the input.
        """
        super().__init__(f"Input validation failed: {', '.join(errors)}")
        self.errors = list(errors)
        self.agent_name = agent_name


class OutputValidationFailure(SwarmError):
    """Model output failed the output rules. Recorded on the response, never raised by the loop."""

    def __init__(self, errors: List[str], agent_name: Optional[str] = None):
        super().__init__(f"Output validation failed: {', '.join(errors)}")
        self.errors = list(errors)
        self.agent_name = agent_name


class ActionError(SwarmError):
    """Base for recoverable action failures that become tool-result messages."""

    def __init__(self, action_name: str, message: str):
        super().__init__(message)
        self.action_name = action_name


class ActionNotFound(ActionError):
    """The model requested an action the active agent does not expose."""

    def __init__(self, action_name: str):
        super().__init__(action_name, f"Action {action_name} not found")


class ActionArgumentError(ActionError):
    """The argument payload of a tool call could not be parsed."""

    def __init__(self, action_name: str, reason: str):
        super().__init__(action_name, f"Invalid arguments for action {action_name}: {reason}")


class ActionExecutionError(ActionError):
    """The action callable raised while running."""

    def __init__(self, action_name: str, reason: str):
        super().__init__(action_name, f"Action {action_name} failed: {reason}")


class UnsupportedToolCall(ActionError):
    """The model issued a tool call of a type other than ``function``."""

    def __init__(self, action_name: str, call_type: str):
        super().__init__(action_name, f"Tool call {action_name} of type {call_type} is not supported")
        self.call_type = call_type


class SerializationError(SwarmError, TypeError):
    """An action return value could not be converted to tool message text. Fatal to the run."""

    def __init__(self, action_name: str, cause: Exception):
        super().__init__(f"Return value of action {action_name} cannot be converted to a string: {cause}")
        self.action_name = action_name
        self.cause = cause


__all__ = [
    "SwarmError",
    "InputValidationError",
    "OutputValidationFailure",
    "ActionError",
    "ActionNotFound",
    "ActionArgumentError",
    "ActionExecutionError",
    "UnsupportedToolCall",
    "SerializationError",
    "ProviderError",
    "ProviderNotConfigured",
]
