"""Object selections built from an ordered list of child fields.

An ObjectBuilder is a declarative description of an object selection:
the child fields in order, plus the constructor that receives their
decoded values. The rendered selection set and the object decoder are
two passes over the same tuple of children, so they always agree on
which keys exist, in which order, and how deep they are nested.

Example usage:
    from gql_codec.core.builder import field, field_as, object_
    from gql_codec.core.fields import string

    @dataclass
    class Country:
        name: str
        capital: str

    country = object_(
        "country",
        field(string("name"))
        .field_as("capitalCity", string("capital"))
        .build(Country),
    ).with_arg("code", variable("code"))

    country.render()
    # country(code: $code) { name capitalCity: capital }
"""

import inspect
from dataclasses import dataclass
from typing import Any, Callable, Generic, TypeVar, Union

from . import decoders
from .decoders import Decoder, Path
from .errors import DecodeError
from .fields import Field, unique
from .selection import FragmentSpread, InlineFragment, Object, PhantomRoot, Scalar

T = TypeVar("T")


def _entry_decoder(child: Field[Any]) -> Decoder[Any]:
    """Decoder for one child, applied to the enclosing JSON object.

    Fragment spreads and inline fragments add no JSON layer of their own,
    so their fields are read from the enclosing object directly.
    """
    selection = child.selection
    if isinstance(selection, (FragmentSpread, InlineFragment, PhantomRoot)):
        return child.decoder
    if isinstance(selection, (Scalar, Object)):
        return decoders.field(
            child.response_key,
            child.decoder,
            missing_as_null=child.is_conditional,
        )
    raise TypeError(f"Unknown selection variant: {selection!r}")


def _check_arity(constructor: Callable[..., Any], count: int):
    try:
        signature = inspect.signature(constructor)
    except (TypeError, ValueError):
        # Some builtins expose no signature
        return
    try:
        signature.bind(*range(count))
    except TypeError as e:
        raise TypeError(
            f"Constructor {constructor!r} cannot take {count} decoded values: {e}"
        ) from e


@dataclass(frozen=True)
class ObjectBuilder(Generic[T]):
    """Ordered child fields plus the constructor for the decoded object."""
    entries: tuple[Field[Any], ...] = ()
    constructor: Callable[..., T] | None = None

    def field(self, child: Field[Any]) -> "ObjectBuilder[Any]":
        """Append a child; its decoded value is the next constructor argument."""
        if self.constructor is not None:
            raise ValueError("Cannot add fields after build()")
        return ObjectBuilder(self.entries + (child,))

    def field_as(self, alias: str, child: Field[Any]) -> "ObjectBuilder[Any]":
        """Append a child rendered as `alias: name` and decoded from `alias`."""
        return self.field(child.with_alias(alias))

    def build(self, value: Callable[..., T] | T) -> "ObjectBuilder[T]":
        """Finish the chain.

        Args:
            value: A callable receiving the decoded child values positionally
                (a dataclass, a NamedTuple, a lambda, ...), or any other
                value, returned as-is whenever decoding succeeds

        Returns:
            A builder usable with `object_`, `inline_fragment`, `fragments.on`
            or `OperationBuilder.root`

        Raises:
            TypeError: If the callable cannot take one positional argument
                per child
        """
        if callable(value):
            _check_arity(value, len(self.entries))
            return ObjectBuilder(self.entries, value)
        return ObjectBuilder(self.entries, lambda *_values: value)

    def selections(self) -> tuple[str, ...]:
        """Shape pass: the rendered child selections, in order."""
        return tuple(child.render() for child in self.entries)

    def fragment_definitions(self) -> tuple[str, ...]:
        return unique(d for child in self.entries for d in child.fragment_definitions)

    def required_keys(self) -> tuple[str, ...]:
        """Response keys always present when this selection applies.

        Conditional children are left out; fragment children contribute
        their own keys, since they read from the same object.
        """
        keys = []
        for child in self.entries:
            if child.is_conditional:
                continue
            if isinstance(child.selection, (FragmentSpread, InlineFragment)):
                keys.extend(child.required_keys)
            elif isinstance(child.selection, (Scalar, Object)):
                keys.append(child.response_key)
        return unique(keys)

    def decoder(self) -> Decoder[T]:
        """Decode pass: read every child in order, then call the constructor.

        Failures from all children are reported together.
        """
        if self.constructor is None:
            raise ValueError("Object selection is incomplete: call build() first")
        steps = tuple(_entry_decoder(child) for child in self.entries)
        constructor = self.constructor

        def run(value: Any, path: Path) -> T:
            if not isinstance(value, dict):
                raise decoders.fail("Object", decoders.classify(value), path)
            values = []
            failures = []
            for step in steps:
                try:
                    values.append(step.decode(value, path))
                except DecodeError as e:
                    failures.extend(e.failures)
            if failures:
                raise DecodeError(failures)
            return constructor(*values)

        return Decoder(run)


BuilderSource = Union[ObjectBuilder[T], Callable[[], ObjectBuilder[T]]]


def resolve(source: BuilderSource[T]) -> ObjectBuilder[T]:
    """Accept a builder or a zero-argument function returning one."""
    if isinstance(source, ObjectBuilder):
        return source
    return source()


def field(child: Field[Any]) -> ObjectBuilder[Any]:
    return ObjectBuilder().field(child)


def field_as(alias: str, child: Field[Any]) -> ObjectBuilder[Any]:
    return ObjectBuilder().field_as(alias, child)


def build(value: Callable[..., T] | T) -> ObjectBuilder[T]:
    """A selection with no children that always decodes to `value`."""
    return ObjectBuilder().build(value)


def object_(name: str, source: BuilderSource[T]) -> Field[T]:
    """A field with a nested selection set."""
    builder = resolve(source)
    return Field(
        name=name,
        selection=Object(builder.selections()),
        decoder=builder.decoder(),
        fragment_definitions=builder.fragment_definitions(),
    )


def inline_fragment(source: BuilderSource[T], type_condition: str | None = None) -> Field[T]:
    """An inline fragment, `... on Type { ... }`, or `... { ... }` without a type.

    Its fields decode from the enclosing object.
    """
    builder = resolve(source)
    return Field(
        name="",
        selection=InlineFragment(builder.selections(), type_condition),
        decoder=builder.decoder(),
        fragment_definitions=builder.fragment_definitions(),
        required_keys=builder.required_keys(),
    )
