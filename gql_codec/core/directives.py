"""Directives attached to fields, fragment spreads, inline fragments and fragments.

Example usage:
    from gql_codec.core import directives

    directives.include("withCapital")          # @include(if: $withCapital)
    directives.skip_if(True)                   # @skip(if: true)
    directives.Directive.new("cached").with_arg("ttl", 60)
"""

from dataclasses import dataclass
from typing import Any

from .arguments import ArgumentValue, InlineBool, InlineString, Variable, inline, render_arguments


@dataclass(frozen=True)
class Directive:
    """A `@name(arg: value, ...)` annotation."""
    name: str
    arguments: tuple[tuple[str, ArgumentValue], ...] = ()

    @classmethod
    def new(cls, name: str) -> "Directive":
        return cls(name=name)

    def with_arg(self, key: str, value: Any) -> "Directive":
        """Return a copy with one more argument, rendered after the existing ones."""
        return Directive(self.name, self.arguments + ((key, inline(value)),))

    def render(self) -> str:
        return f"@{self.name}{render_arguments(self.arguments)}"


def skip(variable_name: str) -> Directive:
    return Directive("skip", (("if", Variable(variable_name)),))


def include(variable_name: str) -> Directive:
    return Directive("include", (("if", Variable(variable_name)),))


def skip_if(condition: bool) -> Directive:
    return Directive("skip", (("if", InlineBool(condition)),))


def include_if(condition: bool) -> Directive:
    return Directive("include", (("if", InlineBool(condition)),))


def deprecated(reason: str | None = None) -> Directive:
    if reason is None:
        return Directive("deprecated")
    return Directive("deprecated", (("reason", InlineString(reason)),))


def specified_by(url: str) -> Directive:
    return Directive("specifiedBy", (("url", InlineString(url)),))


def is_conditional(directive: Directive) -> bool:
    """True for @skip/@include, which may make a field absent from the response."""
    return directive.name in ("skip", "include")


def render_directives(directives: tuple[Directive, ...]) -> str:
    return " ".join(d.render() for d in directives)
