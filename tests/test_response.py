"""Tests for superrouter.http.response — mutable Response."""

import json

import pytest

from superrouter.http.body import BodyStream
from superrouter.http.redaction import Sensitive
from superrouter.http.response import Response


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


def _compact(text: str) -> str:
    return "".join(text.split())


class TestStatusCode:
    def test_defaults_to_200(self) -> None:
        assert Response().status_code == 200

    def test_assignable(self) -> None:
        response = Response()
        response.status_code = 500
        assert response.status_code == 500

    def test_rejects_non_numeric(self) -> None:
        response = Response()
        with pytest.raises(TypeError, match="status_code must be a number."):
            response.status_code = "asdf"  # type: ignore[assignment]

    def test_rejects_bool(self) -> None:
        with pytest.raises(TypeError):
            Response(status_code=True)


class TestHeaders:
    def test_missing_header(self) -> None:
        assert Response().get_header("asdf") is None

    def test_key_must_be_string(self) -> None:
        with pytest.raises(TypeError, match="First argument: key must be a string."):
            Response().set_header(7, "x")  # type: ignore[arg-type]

    def test_value_must_be_string(self) -> None:
        with pytest.raises(TypeError, match="Second argument: value must be a string."):
            Response().set_header("Content-Type", 7)  # type: ignore[arg-type]

    def test_settable(self) -> None:
        response = Response()
        response.set_header("Content-Type", "application/json")
        assert response.get_header("Content-Type") == "application/json"

    def test_clear(self) -> None:
        response = Response()
        response.set_header("Content-Type", "application/json")
        response.clear_header("Content-Type")
        assert response.get_header("Content-Type") is None

    def test_headers_property_is_live(self) -> None:
        response = Response()
        response.headers["X-Trace"] = "abc"
        assert response.get_header("x-trace") == "abc"
        response.set_header("X-Other", "1")
        assert response.headers["x-other"] == "1"


class TestBody:
    def test_is_stream(self) -> None:
        response = Response()
        assert isinstance(response.body, BodyStream)

    def test_body_is_read_only(self) -> None:
        response = Response()
        with pytest.raises(AttributeError):
            response.body = "asdf"  # type: ignore[misc]

    def test_get_body_after_construction(self) -> None:
        response = Response()
        assert response.get_body() is response.body

    def test_get_body_after_stream(self) -> None:
        response = Response()
        response.set_body(_chunks(b"x"))
        assert response.get_body() is response.body

    def test_get_body_after_value(self) -> None:
        response = Response()
        response.set_body("hello world")
        assert response.get_body() == "hello world"

    @pytest.mark.asyncio
    async def test_pipes_stream_input(self) -> None:
        response = Response()
        response.set_body(_chunks(b"hello ", b"world"))
        assert await response.body.read() == b"hello world"

    @pytest.mark.asyncio
    async def test_value_ends_stream(self) -> None:
        response = Response()
        response.set_body("goodbye cruel world")
        assert response.body.ended is True
        assert await response.body.read() == b"goodbye cruel world"

    @pytest.mark.asyncio
    async def test_non_text_value_is_json(self) -> None:
        response = Response()
        response.set_body({"a": 1})
        assert json.loads(await response.body.read()) == {"a": 1}

    @pytest.mark.asyncio
    async def test_breaks_previous_piping(self) -> None:
        response = Response()
        response.set_body(_chunks(b"hello world"))
        old = response.body

        response.set_body("goodbye cruel world")
        assert old.piped is False
        assert await old.read() == b""
        assert await response.body.read() == b"goodbye cruel world"

    @pytest.mark.asyncio
    async def test_constructor_body(self) -> None:
        response = Response(201, {"X-A": "1"}, body="hi")
        assert response.status_code == 201
        assert response.get_header("x-a") == "1"
        assert await response.body.read() == b"hi"


class TestEnded:
    def test_defaults_false(self) -> None:
        assert Response().ended is False

    def test_end(self) -> None:
        response = Response()
        response.end()
        assert response.ended is True
        assert response.body.ended is True


class TestToString:
    def test_includes_status_headers_body(self) -> None:
        response = Response()
        response.set_header("hello", "world")
        response.set_body("hi")
        response.status_code = 222
        assert _compact(response.to_string()) == (
            'Response:{"statusCode":222,"headers":{"hello":"world"},"body":"hi"}'
        )

    def test_hides_sensitive_in_json_string(self) -> None:
        response = Response()
        response.set_header("authorization", "abcdefghijklmnopqrstuvwxyz")
        response.set_body('{"user" : "bob", "password" : "1234" }')
        response.sensitive = {"headers": ["authorization"], "body": ["password"]}

        assert _compact(response.to_string()) == (
            'Response:{"statusCode":200,"headers":{"authorization":"**********"},'
            '"body":{"user":"bob","password":"**********"}}'
        )
        assert response.headers["authorization"] == "abcdefghijklmnopqrstuvwxyz"
        assert json.loads(response.get_body())["password"] == "1234"

    def test_hides_sensitive_in_object(self) -> None:
        response = Response()
        response.set_header("authorization", "abcdefghijklmnopqrstuvwxyz")
        response.set_body({"user": "bob", "password": "1234"})
        response.sensitive = Sensitive(headers=("authorization",), body=("password",))

        assert _compact(str(response)) == (
            'Response:{"statusCode":200,"headers":{"authorization":"**********"},'
            '"body":{"user":"bob","password":"**********"}}'
        )
        assert response.get_body()["password"] == "1234"

    def test_non_json_string_rendered_whole(self) -> None:
        response = Response()
        body = 'NOT VALID JSON! {"user" : "bob", "password" : "1234" }'
        response.set_body(body)
        response.sensitive = {"headers": ["authorization"], "body": ["password"]}

        rendered = json.loads(response.to_string().removeprefix("Response: "))
        assert rendered["body"] == body
        assert response.get_body() == body

    def test_can_turn_off_filtering(self) -> None:
        response = Response()
        response.set_header("authorization", "abcdefghijklmnopqrstuvwxyz")
        response.set_body('{"user" : "bob", "password" : "1234" }')
        response.sensitive = {"headers": ["authorization"], "body": ["password"]}

        rendered = json.loads(response.to_string(hide_sensitive=False).removeprefix("Response: "))
        assert rendered["headers"] == {"authorization": "abcdefghijklmnopqrstuvwxyz"}
        assert rendered["body"] == '{"user" : "bob", "password" : "1234" }'

    def test_stream_body_renders_null(self) -> None:
        rendered = json.loads(Response().to_string().removeprefix("Response: "))
        assert rendered["body"] is None
