"""Fields: a selection and its decoder, built together.

A Field pairs the text it renders into a query with the decoder for the
JSON value the server returns for it. Every combinator returns a new
Field; nothing is mutated after construction.

Example usage:
    from gql_codec.core.fields import string, list_, optional

    name = string("name")
    languages = list_(string("languages"))
    capital = optional(string("capital"))
"""

from dataclasses import dataclass, replace
from typing import Any, Callable, Generic, Iterable, TypeVar

from . import decoders
from .arguments import ArgumentValue, inline
from .decoders import Decoder
from .directives import Directive, is_conditional
from .errors import DecodeError, DecodeFailure
from .scalars import ScalarHandler
from .selection import (
    FragmentSpread,
    InlineFragment,
    PhantomRoot,
    Scalar,
    SelectionVariant,
    render_selection,
)

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class Field(Generic[T]):
    """A selection paired with the decoder for its response value.

    The decoder receives the field's own value (the JSON found under the
    field's response key), not the enclosing object. Fragment spreads and
    inline fragments are the exception: they decode the enclosing object,
    and `required_keys` lists the keys that are always present in it when
    the fragment applies.
    """
    name: str
    selection: SelectionVariant
    decoder: Decoder[T]
    alias: str | None = None
    arguments: tuple[tuple[str, ArgumentValue], ...] = ()
    directives: tuple[Directive, ...] = ()
    fragment_definitions: tuple[str, ...] = ()
    required_keys: tuple[str, ...] = ()

    @property
    def response_key(self) -> str:
        """The key this field's value appears under in the response."""
        return self.alias if self.alias is not None else self.name

    @property
    def is_conditional(self) -> bool:
        """True when @skip/@include may leave the field out of the response."""
        return any(is_conditional(d) for d in self.directives)

    def with_arg(self, name: str, value: Any) -> "Field[T]":
        """Add an argument; arguments render in the order they were added.

        Args:
            name: Argument name
            value: An ArgumentValue (e.g. `variable("code")`) or a plain
                Python value converted with `inline`
        """
        if isinstance(self.selection, (FragmentSpread, InlineFragment, PhantomRoot)):
            raise ValueError(
                f"Arguments are not allowed on {type(self.selection).__name__} selections"
            )
        return replace(self, arguments=self.arguments + ((name, inline(value)),))

    def with_args(self, **values: Any) -> "Field[T]":
        field = self
        for name, value in values.items():
            field = field.with_arg(name, value)
        return field

    def with_directive(self, directive: Directive) -> "Field[T]":
        return replace(self, directives=self.directives + (directive,))

    def with_alias(self, alias: str) -> "Field[T]":
        return replace(self, alias=alias)

    def map(self, fn: Callable[[T], U]) -> "Field[U]":
        """Transform the decoded value without touching the selection."""
        return replace(self, decoder=self.decoder.map(fn))

    def render(self) -> str:
        return render_selection(
            self.name, self.alias, self.arguments, self.directives, self.selection
        )


def unique(definitions: Iterable[str]) -> tuple[str, ...]:
    """Deduplicate by exact text, keeping the first occurrence in place."""
    seen: set[str] = set()
    result = []
    for definition in definitions:
        if definition not in seen:
            seen.add(definition)
            result.append(definition)
    return tuple(result)


def _leaf(name: str, decoder: Decoder[T]) -> Field[T]:
    return Field(name=name, selection=Scalar(), decoder=decoder)


def string(name: str) -> Field[str]:
    return _leaf(name, decoders.string)


def int_(name: str) -> Field[int]:
    return _leaf(name, decoders.integer)


def float_(name: str) -> Field[float]:
    return _leaf(name, decoders.number)


def bool_(name: str) -> Field[bool]:
    return _leaf(name, decoders.boolean)


def id_(name: str) -> Field[str]:
    """An ID field. IDs are always strings on the wire."""
    return _leaf(name, decoders.string)


def json_(name: str) -> Field[Any]:
    """A field whose value is returned as parsed JSON, unchecked."""
    return _leaf(name, decoders.anything)


def typename() -> Field[str]:
    return string("__typename")


def scalar(name: str, handler: ScalarHandler) -> Field[Any]:
    """A custom scalar field decoded through `handler.deserialize`.

    Example:
        created = scalar("createdAt", DateTimeHandler())
    """
    def run(value: Any, path: decoders.Path) -> Any:
        try:
            return handler.deserialize(value)
        except (ValueError, TypeError) as e:
            raise DecodeError([
                DecodeFailure(
                    expected=handler.type_name,
                    found=f"{decoders.classify(value)} ({e})",
                    path=path,
                )
            ]) from e
    return _leaf(name, Decoder(run))


def optional(field: Field[T]) -> Field[T | None]:
    """Allow the field's value to be null; null decodes to None.

    A fragment spread or inline fragment decodes to None when its fields are
    missing from the enclosing object, as happens when its type condition
    does not match or @skip/@include leaves it out.
    """
    if isinstance(field.selection, (FragmentSpread, InlineFragment)):
        return replace(field, decoder=decoders.when_present(field.required_keys, field.decoder))
    return replace(field, decoder=decoders.nullable(field.decoder))


def list_(field: Field[T]) -> Field[list[T]]:
    """Decode the field's value as a list of what `field` decodes."""
    return replace(field, decoder=decoders.list_of(field.decoder))
