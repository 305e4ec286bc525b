"""
Action descriptors and the per-agent action registry
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Union

CONTEXT_PARAM = "context_variables"


@dataclass
class ActionParameter:
    """One declared parameter of an action"""
    name: str
    type: str = "string"
    description: str = ""
    required: bool = False

    def to_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        return schema


def _describe(func: Callable) -> str:
    doc = inspect.getdoc(func)
    if doc:
        return doc.split("\n\n", 1)[0].strip()
    return f"Function {getattr(func, '__name__', 'action')}"


def _naive_parameters(func: Callable) -> List[ActionParameter]:
    """Every signature parameter except context_variables, typed as a string."""
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return []
    params = []
    for param in signature.parameters.values():
        if param.name == CONTEXT_PARAM:
            continue
        if param.kind in (param.VAR_POSITIONAL, param.VAR_KEYWORD):
            continue
        params.append(ActionParameter(name=param.name))
    return params


class Action:
    """Callable the model may request, with an explicit schema.

    Declared actions receive ``(context_variables, **arguments)``. Plain callables
    wrapped via :meth:`from_callable` keep the permissive positional convention:
    ``(context_variables, *arguments.values())``.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        name: Optional[str] = None,
        description: Optional[str] = None,
        parameters: Optional[List[ActionParameter]] = None,
    ):
        self.func = func
        self.name: str = name or getattr(func, "__name__", "action")
        self.description: str = description or _describe(func)
        self.declared = parameters is not None
        self.parameters: List[ActionParameter] = list(parameters) if parameters is not None else _naive_parameters(func)

    @classmethod
    def from_callable(cls, func: Callable[..., Any]) -> "Action":
        return cls(func)

    def to_openai_function(self) -> Dict[str, Any]:
        """Convert action to OpenAI function calling format"""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": {
                "type": "object",
                "properties": {p.name: p.to_schema() for p in self.parameters},
                "required": [p.name for p in self.parameters if p.required] if self.declared else [],
            },
        }

    def schema(self) -> Dict[str, Any]:
        return {"type": "function", "function": self.to_openai_function()}

    def invoke(self, context_variables: Dict[str, Any], arguments: Dict[str, Any]) -> Any:
        if self.declared:
            return self.func(context_variables, **arguments)
        return self.func(context_variables, *arguments.values())

    def __call__(self, *args: Any, **kwargs: Any) -> Any:
        return self.func(*args, **kwargs)

    def __repr__(self) -> str:
        return f"Action(name={self.name!r})"


def action(
    name: Optional[str] = None,
    description: Optional[str] = None,
    parameters: Optional[Iterable[Union[ActionParameter, str]]] = None,
) -> Callable[[Callable[..., Any]], Action]:
    """Decorator declaring an action; bare strings in ``parameters`` become required string params."""

    def decorator(func: Callable[..., Any]) -> Action:
        declared = None
        if parameters is not None:
            declared = [p if isinstance(p, ActionParameter) else ActionParameter(name=p, required=True) for p in parameters]
        return Action(func, name=name, description=description, parameters=declared)

    return decorator


ActionLike = Union[Action, Callable[..., Any], Dict[str, Any]]


def to_schema(entry: ActionLike) -> Dict[str, Any]:
    """Schema for an agent action entry; dict entries are declarative and pass through."""
    if isinstance(entry, dict):
        return entry
    if isinstance(entry, Action):
        return entry.schema()
    return Action.from_callable(entry).schema()


class ActionRegistry:
    """Registry of the dispatchable actions of one agent"""

    def __init__(self, entries: Optional[Iterable[ActionLike]] = None):
        self._actions: Dict[str, Action] = {}
        for entry in entries or []:
            if isinstance(entry, dict):
                continue
            self.register(entry)

    def register(self, entry: Union[Action, Callable[..., Any]]) -> Action:
        act = entry if isinstance(entry, Action) else Action.from_callable(entry)
        self._actions[act.name] = act
        return act

    def get(self, name: str) -> Optional[Action]:
        return self._actions.get(name)

    def all(self) -> List[Action]:
        return list(self._actions.values())

    def names(self) -> List[str]:
        return list(self._actions.keys())
