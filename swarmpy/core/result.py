from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, Optional

if TYPE_CHECKING:  # pragma: no cover
    from .agent import Agent


@dataclass
class Result:
    """Outcome of one action call.

    Attributes:
        value: Text sent back to the model as the tool message.
        agent: Agent to hand the conversation off to, if any.
        context_variables: Delta merged into the run's context variables.
    """
    value: Optional[str] = None
    agent: Optional["Agent"] = None
    context_variables: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def with_value(cls, value: str) -> "Result":
        return cls(value=value)

    @classmethod
    def with_agent(cls, agent: "Agent") -> "Result":
        return cls(agent=agent)

    @classmethod
    def with_context(cls, context_variables: Dict[str, Any]) -> "Result":
        return cls(context_variables=dict(context_variables))
