"""Named fragments.

A Fragment is defined once and spread wherever it is needed. Spreading
carries the fragment's definition along with the field, so operations
collect every definition they use without any manual registration.

Example usage:
    from gql_codec.core import fragments
    from gql_codec.core.builder import field, object_
    from gql_codec.core.fields import string

    country_fields = fragments.on(
        "Country", "CountryFields",
        field(string("name")).field(string("code")).build(Country),
    )
    country = object_("country", field(country_fields.spread()).build(lambda c: c))
"""

from dataclasses import dataclass, replace
from typing import Generic, TypeVar

from .builder import BuilderSource, resolve
from .decoders import Decoder
from .directives import Directive, render_directives
from .fields import Field, unique
from .selection import FragmentSpread, render_selection_set

T = TypeVar("T")


@dataclass(frozen=True)
class Fragment(Generic[T]):
    name: str
    type_condition: str
    selections: tuple[str, ...]
    decoder: Decoder[T]
    directives: tuple[Directive, ...] = ()
    nested_definitions: tuple[str, ...] = ()
    required_keys: tuple[str, ...] = ()

    def with_directive(self, directive: Directive) -> "Fragment[T]":
        return replace(self, directives=self.directives + (directive,))

    @property
    def selection_text(self) -> str:
        return " ".join(self.selections)

    def definition(self) -> str:
        """Render `fragment Name on Type @dirs { ... }`."""
        parts = ["fragment", self.name, "on", self.type_condition]
        if self.directives:
            parts.append(render_directives(self.directives))
        parts.append(render_selection_set(self.selections))
        return " ".join(parts)

    def spread(self) -> Field[T]:
        """A `...Name` field; decodes this fragment's fields from the enclosing object."""
        return Field(
            name=self.name,
            selection=FragmentSpread(self.name),
            decoder=self.decoder,
            fragment_definitions=unique((self.definition(),) + self.nested_definitions),
            required_keys=self.required_keys,
        )


def on(type_condition: str, name: str, source: BuilderSource[T]) -> Fragment[T]:
    """Define fragment `name` on `type_condition`."""
    builder = resolve(source)
    return Fragment(
        name=name,
        type_condition=type_condition,
        selections=builder.selections(),
        decoder=builder.decoder(),
        nested_definitions=builder.fragment_definitions(),
        required_keys=builder.required_keys(),
    )


def spread(fragment: Fragment[T]) -> Field[T]:
    return fragment.spread()
