"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from gql_codec import cli
from gql_codec.core.transport import HttpResponse

GET_COUNTRY_TEXT = "query GetCountry($code: ID!) { country(code: $code) { name code } }"


class FakeTransport:
    """Stands in for HttpxTransport; answers with a canned response."""

    response = HttpResponse(200, "{}")
    requests: list = []

    def __init__(self, url, *, headers=None, timeout=30.0):
        self.url = url
        self.headers = headers

    def __call__(self, request):
        FakeTransport.requests.append((self.url, self.headers, json.loads(request.body)))
        return FakeTransport.response

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        pass


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def fake_transport(monkeypatch):
    FakeTransport.requests = []
    monkeypatch.setattr(cli, "HttpxTransport", FakeTransport)
    return FakeTransport


class TestRender:
    """Tests for the render command."""

    def test_prints_text(self, runner):
        result = runner.invoke(cli.main, ["render", "sample_operations:GET_COUNTRY"])
        assert result.exit_code == 0
        assert result.output == GET_COUNTRY_TEXT + "\n"

    def test_check_valid(self, runner):
        result = runner.invoke(cli.main, ["render", "sample_operations:GET_COUNTRY", "--check"])
        assert result.exit_code == 0

    def test_check_invalid(self, runner):
        result = runner.invoke(cli.main, ["render", "sample_operations:BROKEN", "--check"])
        assert result.exit_code == 1
        assert "Invalid GraphQL" in result.output

    def test_not_an_operation(self, runner):
        result = runner.invoke(cli.main, ["render", "sample_operations:NOT_AN_OPERATION"])
        assert result.exit_code == 2

    def test_bad_target(self, runner):
        result = runner.invoke(cli.main, ["render", "no_colon"])
        assert result.exit_code == 2

    def test_missing_module(self, runner):
        result = runner.invoke(cli.main, ["render", "no_such_module_here:X"])
        assert result.exit_code == 2


class TestSend:
    """Tests for the send command."""

    def test_prints_decoded_value(self, runner, fake_transport):
        fake_transport.response = HttpResponse(
            200, '{"data": {"country": {"name": "Peru", "code": "PE"}}}'
        )
        result = runner.invoke(cli.main, [
            "send", "sample_operations:GET_COUNTRY",
            "--url", "https://example.com/graphql",
            "--var", 'code="PE"',
            "-H", "Authorization: Bearer t",
        ])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"name": "Peru", "code": "PE"}

        url, headers, payload = fake_transport.requests[0]
        assert url == "https://example.com/graphql"
        assert headers == {"Authorization": "Bearer t"}
        assert payload == {"query": GET_COUNTRY_TEXT, "variables": {"code": "PE"}}

    def test_non_json_variable_is_a_string(self, runner, fake_transport):
        fake_transport.response = HttpResponse(200, '{"data": null}')
        result = runner.invoke(cli.main, [
            "send", "sample_operations:GET_COUNTRY",
            "--url", "https://example.com/graphql",
            "--var", "code=PE",
        ])
        assert result.exit_code == 0
        assert result.output.strip() == "null"
        assert fake_transport.requests[0][2]["variables"] == {"code": "PE"}

    def test_graphql_errors(self, runner, fake_transport):
        fake_transport.response = HttpResponse(200, '{"errors": [{"message": "boom"}]}')
        result = runner.invoke(cli.main, [
            "send", "sample_operations:GET_COUNTRY", "--url", "https://example.com/graphql",
        ])
        assert result.exit_code == 1
        assert "error: boom" in result.output

    def test_http_error(self, runner, fake_transport):
        fake_transport.response = HttpResponse(502, "Bad Gateway")
        result = runner.invoke(cli.main, [
            "send", "sample_operations:GET_COUNTRY", "--url", "https://example.com/graphql",
        ])
        assert result.exit_code == 1
        assert "HTTP 502" in result.output

    def test_bad_variable(self, runner, fake_transport):
        result = runner.invoke(cli.main, [
            "send", "sample_operations:GET_COUNTRY",
            "--url", "https://example.com/graphql",
            "--var", "code",
        ])
        assert result.exit_code == 2
