"""Argument values for fields and directives.

An argument is either a reference to an operation variable or an inline
literal. Each value knows how to render itself as GraphQL text.
"""

import math
from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class Variable:
    """Reference to an operation variable: `$name`."""
    name: str

    def render(self) -> str:
        return f"${self.name}"


@dataclass(frozen=True)
class InlineString:
    value: str

    def render(self) -> str:
        return escape_string(self.value)


@dataclass(frozen=True)
class InlineInt:
    value: int

    def render(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class InlineFloat:
    value: float

    def __post_init__(self):
        if math.isnan(self.value) or math.isinf(self.value):
            raise ValueError(f"GraphQL has no literal for {self.value!r}")

    def render(self) -> str:
        return repr(float(self.value))


@dataclass(frozen=True)
class InlineBool:
    value: bool

    def render(self) -> str:
        return "true" if self.value else "false"


@dataclass(frozen=True)
class InlineNull:
    def render(self) -> str:
        return "null"


@dataclass(frozen=True)
class InlineEnum:
    """Bare enum value, rendered without quotes (e.g. `ACTIVE`)."""
    value: str

    def render(self) -> str:
        return self.value


@dataclass(frozen=True)
class InlineObject:
    fields: tuple[tuple[str, "ArgumentValue"], ...]

    def render(self) -> str:
        if not self.fields:
            return "{}"
        return "{ " + ", ".join(f"{k}: {v.render()}" for k, v in self.fields) + " }"


@dataclass(frozen=True)
class InlineList:
    items: tuple["ArgumentValue", ...]

    def render(self) -> str:
        return "[" + ", ".join(item.render() for item in self.items) + "]"


ArgumentValue = Union[
    Variable,
    InlineString,
    InlineInt,
    InlineFloat,
    InlineBool,
    InlineNull,
    InlineEnum,
    InlineObject,
    InlineList,
]

_ARGUMENT_TYPES = (
    Variable,
    InlineString,
    InlineInt,
    InlineFloat,
    InlineBool,
    InlineNull,
    InlineEnum,
    InlineObject,
    InlineList,
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def escape_string(value: str) -> str:
    """Render a GraphQL string literal, quotes included."""
    return '"' + "".join(_ESCAPES.get(ch, ch) for ch in value) + '"'


def variable(name: str) -> Variable:
    return Variable(name)


def inline(value: Any) -> ArgumentValue:
    """Convert a plain Python value into an inline argument value.

    Argument values pass through unchanged. Dict keys keep their insertion
    order; lists and tuples become GraphQL lists.

    Raises:
        TypeError: If the value has no GraphQL literal form
    """
    if isinstance(value, _ARGUMENT_TYPES):
        return value
    if value is None:
        return InlineNull()
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return InlineBool(value)
    if isinstance(value, int):
        return InlineInt(value)
    if isinstance(value, float):
        return InlineFloat(value)
    if isinstance(value, str):
        return InlineString(value)
    if isinstance(value, dict):
        return InlineObject(tuple((str(k), inline(v)) for k, v in value.items()))
    if isinstance(value, (list, tuple)):
        return InlineList(tuple(inline(v) for v in value))
    raise TypeError(f"Cannot use {type(value).__name__} as a GraphQL argument")


def render_arguments(arguments: tuple[tuple[str, ArgumentValue], ...]) -> str:
    """Render `(key: value, ...)`, or nothing for an empty list."""
    if not arguments:
        return ""
    return "(" + ", ".join(f"{name}: {value.render()}" for name, value in arguments) + ")"
