"""Tests for object selections and their decoders."""

from dataclasses import dataclass

import pytest

from gql_codec.core.arguments import variable
from gql_codec.core.builder import (
    ObjectBuilder,
    build,
    field,
    field_as,
    inline_fragment,
    object_,
)
from gql_codec.core.directives import include, skip
from gql_codec.core.errors import DecodeError, DecodeFailure
from gql_codec.core.fields import id_, int_, list_, optional, string
from gql_codec.core.selection import Object


@dataclass
class Country:
    name: str
    code: str


@dataclass
class Continent:
    name: str
    countries: list


@pytest.fixture
def country():
    return object_(
        "country",
        field(string("name")).field(string("code")).build(Country),
    ).with_arg("code", variable("code"))


class TestObjectRendering:
    """Tests for the shape pass."""

    def test_render(self, country):
        assert country.render() == "country(code: $code) { name code }"
        assert country.selection == Object(("name", "code"))

    def test_directive_between_arguments_and_braces(self, country):
        rendered = country.with_directive(include("withCountry")).render()
        assert rendered == "country(code: $code) @include(if: $withCountry) { name code }"

    def test_field_as(self):
        capital = object_(
            "country",
            field(string("name")).field_as("capitalCity", string("capital")).build(Country),
        )
        assert capital.render() == "country { name capitalCity: capital }"

    def test_field_as_first(self):
        builder = field_as("label", string("name")).build(lambda n: n)
        assert builder.selections() == ("label: name",)

    def test_nested(self):
        continent = object_(
            "continent",
            field(string("name"))
            .field(list_(object_("countries", field(string("code")).build(lambda c: c))))
            .build(Continent),
        )
        assert continent.render() == "continent { name countries { code } }"

    def test_callable_source(self):
        lazy = object_("country", lambda: field(string("name")).build(lambda n: n))
        assert lazy.render() == "country { name }"


class TestObjectDecoding:
    """Tests for the decode pass."""

    def test_decode(self, country):
        value = country.decoder.decode({"name": "Peru", "code": "PE"})
        assert value == Country("Peru", "PE")

    def test_decode_alias_key(self):
        capital = object_(
            "country",
            field(string("name")).field_as("capitalCity", string("capital")).build(Country),
        )
        assert capital.decoder.decode({"name": "Peru", "capitalCity": "Lima"}) == Country("Peru", "Lima")

        with pytest.raises(DecodeError) as exc_info:
            capital.decoder.decode({"name": "Peru", "capital": "Lima"})
        assert exc_info.value.failures == [DecodeFailure("Field", "Nothing", ("capitalCity",))]

    def test_nested_failure_path(self):
        continent = object_(
            "continent",
            field(string("name"))
            .field(list_(object_("countries", field(string("code")).build(lambda c: c))))
            .build(Continent),
        )
        assert continent.decoder.decode(
            {"name": "Europe", "countries": [{"code": "FR"}]}
        ) == Continent("Europe", ["FR"])

        with pytest.raises(DecodeError) as exc_info:
            continent.decoder.decode({"name": "Europe", "countries": [{"code": "FR"}, {"code": 1}]})
        assert exc_info.value.failures == [DecodeFailure("String", "Int", ("countries", 1, "code"))]

    def test_all_failures_reported(self, country):
        with pytest.raises(DecodeError) as exc_info:
            country.decoder.decode({"name": 1})
        assert exc_info.value.failures == [
            DecodeFailure("String", "Int", ("name",)),
            DecodeFailure("Field", "Nothing", ("code",)),
        ]

    def test_non_object(self, country):
        with pytest.raises(DecodeError) as exc_info:
            country.decoder.decode(None)
        assert exc_info.value.failures == [DecodeFailure("Object", "Null", ())]

    def test_optional_object(self, country):
        assert optional(country).decoder.decode(None) is None


class TestStructuralParity:
    """The rendered selections and the decoder come from the same children."""

    @pytest.mark.parametrize("n", [1, 2, 3, 5, 8])
    def test_selection_count_matches_decoded_keys(self, n):
        builder = ObjectBuilder()
        for i in range(n):
            builder = builder.field(int_(f"f{i}"))
        builder = builder.build(lambda *values: values)

        selections = builder.selections()
        assert len(selections) == n

        response = {selection: i for i, selection in enumerate(selections)}
        assert builder.decoder().decode(response) == tuple(range(n))

    def test_missing_key_fails(self):
        builder = field(int_("a")).field(int_("b")).build(lambda a, b: a + b)
        with pytest.raises(DecodeError):
            builder.decoder().decode({"a": 1})


class TestBuild:
    """Tests for finishing a chain."""

    def test_constant_value(self):
        assert build(42).decoder().decode({}) == 42

    def test_constant_after_fields(self):
        builder = field(string("name")).build("done")
        assert builder.decoder().decode({"name": "x"}) == "done"

    def test_zero_argument_callable(self):
        assert build(lambda: "pong").decoder().decode({}) == "pong"

    def test_unfinished_builder(self):
        with pytest.raises(ValueError):
            object_("country", field(string("name")))

    def test_no_fields_after_build(self):
        with pytest.raises(ValueError):
            field(string("name")).build(lambda n: n).field(string("code"))

    def test_constructor_arity_checked(self):
        with pytest.raises(TypeError):
            field(string("a")).field(string("b")).build(lambda a: a)
        with pytest.raises(TypeError):
            field(string("a")).build(Summary)

    def test_constructor_with_defaults(self):
        builder = field(string("a")).build(lambda a, b="x": (a, b))
        assert builder.decoder().decode({"a": "y"}) == ("y", "x")

    def test_builtin_constructor(self):
        builder = field(string("a")).build(str.upper)
        assert builder.decoder().decode({"a": "peru"}) == "PERU"


class TestInlineFragments:
    """Tests for inline fragments."""

    def test_render_with_type_condition(self):
        fragment = inline_fragment(field(string("name")).build(lambda n: n), "User")
        assert fragment.render() == "... on User { name }"

    def test_render_without_type_condition(self):
        fragment = inline_fragment(field(string("name")).build(lambda n: n))
        assert fragment.render() == "... { name }"

    def test_directive_before_braces(self):
        fragment = inline_fragment(
            field(string("name")).build(lambda n: n), "User"
        ).with_directive(include("withName"))
        assert fragment.render() == "... on User @include(if: $withName) { name }"

        untyped = inline_fragment(
            field(string("name")).build(lambda n: n)
        ).with_directive(skip("hide"))
        assert untyped.render() == "... @skip(if: $hide) { name }"

    def test_decodes_from_parent_object(self):
        node = object_(
            "node",
            field(id_("id"))
            .field(inline_fragment(field(string("name")).build(lambda n: n), "User"))
            .build(lambda i, n: (i, n)),
        )
        assert node.render() == "node { id ... on User { name } }"
        assert node.decoder.decode({"id": "1", "name": "Ann"}) == ("1", "Ann")


@dataclass
class Summary:
    name: str
    capital: str | None


class TestConditionalFields:
    """Fields under @skip/@include may be absent from the response."""

    def test_absent_optional_field(self):
        summary = object_(
            "country",
            field(string("name"))
            .field(optional(string("capital")).with_directive(skip("noCapital")))
            .build(Summary),
        )
        assert summary.render() == "country { name capital @skip(if: $noCapital) }"
        assert summary.decoder.decode({"name": "Peru"}) == Summary("Peru", None)
        assert summary.decoder.decode({"name": "Peru", "capital": "Lima"}) == Summary("Peru", "Lima")

    def test_absent_required_field(self):
        summary = object_(
            "country",
            field(string("name"))
            .field(string("capital").with_directive(include("withCapital")))
            .build(Summary),
        )
        with pytest.raises(DecodeError) as exc_info:
            summary.decoder.decode({"name": "Peru"})
        assert exc_info.value.failures == [DecodeFailure("String", "Null", ("capital",))]


@dataclass
class User:
    name: str


class TestOptionalFragments:
    """Optional fragments decode to None when they do not apply."""

    def node(self, fragment):
        return object_("node", field(id_("id")).field(fragment).build(lambda i, f: (i, f)))

    def test_type_condition_not_matched(self):
        user = optional(inline_fragment(field(string("name")).build(User), "User"))
        node = self.node(user)
        assert node.decoder.decode({"id": "1"}) == ("1", None)
        assert node.decoder.decode({"id": "2", "name": "Ann"}) == ("2", User("Ann"))

    def test_excluded_by_directive(self):
        user = optional(
            inline_fragment(field(string("name")).build(User), "User")
        ).with_directive(include("withUser"))
        node = self.node(user)
        assert node.render() == "node { id ... on User @include(if: $withUser) { name } }"
        assert node.decoder.decode({"id": "1"}) == ("1", None)

    def test_present_keys_still_decoded(self):
        user = optional(inline_fragment(field(string("name")).build(User), "User"))
        with pytest.raises(DecodeError) as exc_info:
            self.node(user).decoder.decode({"id": "1", "name": 5})
        assert exc_info.value.failures == [DecodeFailure("String", "Int", ("name",))]

    def test_required_fragment_still_fails(self):
        user = inline_fragment(field(string("name")).build(User), "User")
        with pytest.raises(DecodeError) as exc_info:
            self.node(user).decoder.decode({"id": "1"})
        assert exc_info.value.failures == [DecodeFailure("Field", "Nothing", ("name",))]

    def test_required_keys(self):
        builder = (
            field(string("name"))
            .field_as("city", string("capital"))
            .field(optional(string("motto")).with_directive(skip("noMotto")))
            .field(inline_fragment(field(id_("id")).build(lambda i: i)))
            .build(lambda *values: values)
        )
        assert builder.required_keys() == ("name", "city", "id")


class TestFragmentArguments:
    """Fragments take no arguments."""

    def test_inline_fragment_rejects_arguments(self):
        fragment = inline_fragment(field(string("name")).build(User), "User")
        with pytest.raises(ValueError):
            fragment.with_arg("first", 10)
