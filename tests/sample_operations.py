"""Operations loaded by the CLI tests."""

from dataclasses import dataclass

from gql_codec.core import field, object_, query, string, variable


@dataclass
class Country:
    name: str
    code: str


GET_COUNTRY = (
    query("GetCountry")
    .variable("code", "ID!")
    .field(
        object_("country", field(string("name")).field(string("code")).build(Country))
        .with_arg("code", variable("code"))
    )
)

BROKEN = query().field(string(""))

NOT_AN_OPERATION = "query { hello }"
