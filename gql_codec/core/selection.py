"""Selection variants and their GraphQL text rendering.

Each Field carries exactly one variant. The variant decides how the field
renders and how its decoder is placed inside the parent object (see
`builder.py` and `operation.py`).
"""

from dataclasses import dataclass
from typing import Union

from .arguments import ArgumentValue, render_arguments
from .directives import Directive, render_directives


@dataclass(frozen=True)
class Scalar:
    """A leaf field without a sub-selection."""
    pass


@dataclass(frozen=True)
class Object:
    """A field with a nested selection set."""
    children: tuple[str, ...]


@dataclass(frozen=True)
class FragmentSpread:
    fragment_name: str


@dataclass(frozen=True)
class InlineFragment:
    children: tuple[str, ...]
    type_condition: str | None = None


@dataclass(frozen=True)
class PhantomRoot:
    """Several top-level selections rendered without an enclosing field."""
    children: tuple[str, ...]


SelectionVariant = Union[Scalar, Object, FragmentSpread, InlineFragment, PhantomRoot]


def render_selection_set(children: tuple[str, ...]) -> str:
    return "{ " + " ".join(children) + " }"


def render_selection(
    name: str,
    alias: str | None,
    arguments: tuple[tuple[str, ArgumentValue], ...],
    directives: tuple[Directive, ...],
    variant: SelectionVariant,
) -> str:
    """Render one selection as GraphQL text.

    Args:
        name: Field name (unused by fragments and phantom roots)
        alias: Response key override, rendered as `alias: `
        arguments: Field arguments in render order
        directives: Directives in render order
        variant: The selection variant

    Returns:
        The selection text, e.g. `c: country(code: $c) @include(if: $v) { name }`
    """
    if isinstance(variant, PhantomRoot):
        return " ".join(variant.children)

    if isinstance(variant, Scalar):
        parts = [name + render_arguments(arguments)]
    elif isinstance(variant, Object):
        parts = [name + render_arguments(arguments)]
    elif isinstance(variant, FragmentSpread):
        parts = ["..." + variant.fragment_name]
    elif isinstance(variant, InlineFragment):
        parts = ["..."]
        if variant.type_condition is not None:
            parts.append(f"on {variant.type_condition}")
    else:
        raise TypeError(f"Unknown selection variant: {variant!r}")

    if directives:
        parts.append(render_directives(directives))
    if isinstance(variant, (Object, InlineFragment)):
        parts.append(render_selection_set(variant.children))

    text = " ".join(parts)
    if alias is not None:
        text = f"{alias}: {text}"
    return text
