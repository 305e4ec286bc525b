"""
Factories for hand-off actions.

A hand-off action returns a Result whose ``agent`` re-targets the run. The
context delta it returns is the current variables overlaid with the update.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from .actions import Action
from .agent import Agent
from .result import Result


@dataclass
class HandoffCondition:
    condition: Callable[[Dict[str, Any]], bool]
    target_agent: Agent
    context_update: Dict[str, Any] = field(default_factory=dict)


def _slug(name: str) -> str:
    return re.sub(r"[^a-zA-Z0-9_]+", "_", name).strip("_").lower() or "agent"


def _merged(current: Optional[Dict[str, Any]], update: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    if update:
        return {**(current or {}), **update}
    return dict(current or {})


def create_handoff(
    target: Agent,
    context_update: Optional[Dict[str, Any]] = None,
    name: Optional[str] = None,
    description: Optional[str] = None,
) -> Action:
    """Action that transfers the conversation to ``target``."""

    def handoff(context_variables: Dict[str, Any]) -> Result:
        return Result(agent=target, context_variables=_merged(context_variables, context_update))

    return Action(
        handoff,
        name=name or f"transfer_to_{_slug(target.name)}",
        description=description or f"Transfer the conversation to {target.name}.",
        parameters=[],
    )


def create_conditional_handoff(
    conditions: List[HandoffCondition],
    name: str = "conditional_handoff",
    description: Optional[str] = None,
) -> Action:
    """Action that transfers to the first agent whose condition holds; no match returns None."""

    def conditional_handoff(context_variables: Dict[str, Any]) -> Optional[Result]:
        for entry in conditions:
            if entry.condition(context_variables):
                return Result(agent=entry.target_agent, context_variables=_merged(context_variables, entry.context_update))
        return None

    targets = ", ".join(c.target_agent.name for c in conditions)
    return Action(
        conditional_handoff,
        name=name,
        description=description or f"Transfer the conversation to one of: {targets}.",
        parameters=[],
    )
