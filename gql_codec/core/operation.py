"""Operation assembly: variables, the root selection and fragment definitions.

Example usage:
    from gql_codec.core.operation import query

    get_country = (
        query("GetCountry")
        .variable("code", "ID!")
        .field(country)
    )
    get_country.text
    # query GetCountry($code: ID!) { country(code: $code) { name } }

Several independent top-level fields go through `root`, which renders
them without a wrapper field:

    both = (
        query("Q")
        .variable("a", "ID!")
        .variable("b", "ID!")
        .root(field(country_a).field(continent_b).build(Pair))
    )
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel
from pydantic_core import to_jsonable_python

from . import decoders
from .builder import BuilderSource, resolve
from .decoders import Decoder
from .fields import Field, unique
from .fragments import Fragment
from .selection import FragmentSpread, InlineFragment, Object, PhantomRoot, Scalar

T = TypeVar("T")


class OperationKind(Enum):
    QUERY = "query"
    MUTATION = "mutation"


@dataclass(frozen=True)
class VariableDefinition:
    name: str
    type_name: str  # e.g. "ID!", "[String!]"

    def render(self) -> str:
        return f"${self.name}: {self.type_name}"


def serialize_variables(variables: dict[str, Any]) -> dict[str, Any]:
    """Convert variable values to JSON-compatible data.

    Pydantic models are dumped by alias without None fields; everything
    else (dates, UUIDs, enums, nested containers) goes through pydantic's
    JSON conversion. None values are kept: they are explicit nulls.
    """
    result = {}
    for key, value in variables.items():
        if isinstance(value, BaseModel):
            result[key] = value.model_dump(mode="json", by_alias=True, exclude_none=True)
        elif isinstance(value, list):
            result[key] = [
                v.model_dump(mode="json", by_alias=True, exclude_none=True)
                if isinstance(v, BaseModel) else to_jsonable_python(v)
                for v in value
            ]
        else:
            result[key] = to_jsonable_python(value)
    return result


def _data_decoder(root: Field[T]) -> Decoder[T]:
    """Decoder for the value of the top-level `data` key."""
    selection = root.selection
    if isinstance(selection, (PhantomRoot, FragmentSpread, InlineFragment)):
        return root.decoder
    if isinstance(selection, (Scalar, Object)):
        return decoders.field(root.response_key, root.decoder, missing_as_null=root.is_conditional)
    raise TypeError(f"Unknown selection variant: {selection!r}")


@dataclass(frozen=True)
class Operation(Generic[T]):
    """A fully rendered operation and the decoder for its response.

    Immutable; send it as many times as needed with different variables.
    """
    kind: OperationKind
    name: str | None
    variables: tuple[VariableDefinition, ...]
    root_field: Field[T]
    text: str
    fragment_definitions: tuple[str, ...]
    data_decoder: Decoder[T]

    @property
    def variable_names(self) -> list[str]:
        return [v.name for v in self.variables]

    @property
    def decoder(self) -> Decoder[T]:
        """Decoder for the whole response body, starting at `data`."""
        return decoders.field("data", self.data_decoder)

    def payload(self, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """The JSON request body for this operation."""
        return {
            "query": self.text,
            "variables": serialize_variables(variables or {}),
        }

    def __str__(self) -> str:
        return self.text


@dataclass(frozen=True)
class OperationBuilder:
    """Collects the operation header before the root selection is given."""
    kind: OperationKind
    name: str | None = None
    variables: tuple[VariableDefinition, ...] = ()
    fragments: tuple[Fragment[Any], ...] = ()

    def variable(self, name: str, type_name: str) -> "OperationBuilder":
        """Declare `$name: type_name`; declarations render in call order.

        Raises:
            ValueError: If the variable is already declared
        """
        if any(v.name == name for v in self.variables):
            raise ValueError(f"Variable ${name} is already declared")
        return OperationBuilder(
            self.kind,
            self.name,
            self.variables + (VariableDefinition(name, type_name),),
            self.fragments,
        )

    def fragment(self, fragment: Fragment[Any]) -> "OperationBuilder":
        """Register a fragment definition explicitly.

        Spread fragments are collected automatically; explicit registration
        is only needed for definitions the root selection does not spread.
        """
        return OperationBuilder(self.kind, self.name, self.variables, self.fragments + (fragment,))

    def field(self, root: Field[T]) -> Operation[T]:
        """Finish the operation with a single root field."""
        explicit = [d for f in self.fragments for d in f.spread().fragment_definitions]
        definitions = unique(explicit + list(root.fragment_definitions))
        return Operation(
            kind=self.kind,
            name=self.name,
            variables=self.variables,
            root_field=root,
            text=self._render(root, definitions),
            fragment_definitions=definitions,
            data_decoder=_data_decoder(root),
        )

    def root(self, source: BuilderSource[T]) -> Operation[T]:
        """Finish the operation with several top-level fields and no wrapper."""
        builder = resolve(source)
        phantom = Field(
            name="",
            selection=PhantomRoot(builder.selections()),
            decoder=builder.decoder(),
            fragment_definitions=builder.fragment_definitions(),
        )
        return self.field(phantom)

    def _render(self, root: Field[Any], definitions: tuple[str, ...]) -> str:
        header = self.kind.value
        if self.name:
            header = f"{header} {self.name}"
        if self.variables:
            header += "(" + ", ".join(v.render() for v in self.variables) + ")"

        text = f"{header} {{ {root.render()} }}"
        for definition in definitions:
            text += f"\n\n{definition}"
        return text


def query(name: str | None = None) -> OperationBuilder:
    return OperationBuilder(OperationKind.QUERY, name)


def mutation(name: str | None = None) -> OperationBuilder:
    return OperationBuilder(OperationKind.MUTATION, name)
