"""Tests for superrouter.http.request — normalized, mutable Request."""

import pytest

from superrouter.http.body import BodyStream
from superrouter.http.message import Message
from superrouter.http.request import Request


async def _chunks(*parts: bytes):
    for part in parts:
        yield part


class TestConstructor:
    def test_fields(self) -> None:
        request = Request("/", "GET", headers={"Hello": "world"})
        assert request.path == "/"
        assert request.method == "get"
        assert request.get_header("hello") == "world"
        assert request.route_params == {}
        assert request.matched_route is None

    def test_path_must_be_string(self) -> None:
        with pytest.raises(TypeError, match="path must be a string."):
            Request(7, "get")  # type: ignore[arg-type]

    def test_method_must_be_string(self) -> None:
        with pytest.raises(TypeError, match="method must be a string."):
            Request("/", 7)  # type: ignore[arg-type]

    def test_method_must_be_known(self) -> None:
        with pytest.raises(ValueError, match="valid method"):
            Request("/", "heart!")

    def test_all_is_not_a_request_method(self) -> None:
        with pytest.raises(ValueError):
            Request("/", "all")

    def test_headers_must_be_mapping(self) -> None:
        with pytest.raises(TypeError, match="headers must be a mapping."):
            Request("/", "get", headers="asdf")  # type: ignore[arg-type]

    def test_body_must_be_stream(self) -> None:
        with pytest.raises(TypeError, match="body must be a readable stream."):
            Request("/", "get", body="asdf")  # type: ignore[arg-type]

    def test_extra_fields(self) -> None:
        request = Request("/", "get", a=1)
        assert request.extra == {"a": 1}

    def test_headers_copied_on_construction(self) -> None:
        headers = {"a": "1"}
        request = Request("/", "get", headers=headers)
        headers["b"] = "2"
        assert request.get_header("b") is None


class TestNormalization:
    def test_path_normalized(self) -> None:
        request = Request("/WoNkY/", "get")
        assert request.path == "/wonky"
        assert request.original_path == "/WoNkY/"

    def test_root(self) -> None:
        assert Request("/", "get").path == "/"
        assert Request("", "get").path == "/"

    def test_leading_slash_added(self) -> None:
        assert Request("a/b", "get").path == "/a/b"

    def test_path_setter_normalizes(self) -> None:
        request = Request("/", "get")
        request.path = "/A/B/"
        assert request.path == "/a/b"
        assert request.original_path == "/"

    def test_path_setter_validates(self) -> None:
        request = Request("/", "get")
        with pytest.raises(TypeError, match="path must be a string."):
            request.path = 7  # type: ignore[assignment]

    def test_method_setter(self) -> None:
        request = Request("/", "get")
        request.method = "POST"
        assert request.method == "post"
        with pytest.raises(ValueError):
            request.method = "fetch"

    def test_original_path_read_only(self) -> None:
        request = Request("/", "get")
        with pytest.raises(AttributeError):
            request.original_path = "/other"  # type: ignore[misc]

    def test_explicit_original_path(self) -> None:
        request = Request("/a", "get", original_path="/Before")
        assert request.original_path == "/Before"


class TestFromRequest:
    def test_copies_fields(self) -> None:
        first = Request("/", "get", headers={"b": "2"}, a=1)
        second = Request.from_request(first)
        assert second is not first
        assert second.headers == {"b": "2"}
        assert second.path == "/"
        assert second.method == "get"
        assert second.extra == {"a": 1}

    def test_keeps_original_path(self) -> None:
        first = Request("/", "get")
        first.path = "/a/b/c"
        second = Request.from_request(first)
        assert second.path == "/a/b/c"
        assert second.original_path == "/"

    def test_keeps_assigned_body(self) -> None:
        first = Request("/", "get")
        first.set_body({"hello": "world"})
        assert Request.from_request(first).get_body() == {"hello": "world"}

    @pytest.mark.asyncio
    async def test_reads_through_stream_body(self) -> None:
        first = Request("/", "get", body=_chunks(b"hello ", b"world"))
        second = Request.from_request(first)
        assert await second.body.read() == b"hello world"


class TestHeaders:
    def test_case_insensitive(self) -> None:
        request = Request("/", "get")
        request.set_header("Content-Type", "application/json")
        assert request.get_header("content-type") == "application/json"
        assert request.headers["CONTENT-TYPE"] == "application/json"

    def test_clear(self) -> None:
        request = Request("/", "get", headers={"A": "1"})
        request.clear_header("a")
        assert request.get_header("A") is None
        request.clear_header("never-set")


class TestBody:
    def test_default_is_stream(self) -> None:
        request = Request("/", "get")
        assert isinstance(request.body, BodyStream)
        assert request.get_body() is request.body

    def test_set_body_value(self) -> None:
        request = Request("/", "get")
        request.set_body({"hello": "world"})
        assert request.get_body() == {"hello": "world"}

    @pytest.mark.asyncio
    async def test_stream_body(self) -> None:
        request = Request("/", "get", body=_chunks(b"hello ", b"world"))
        assert await request.body.read() == b"hello world"

    @pytest.mark.asyncio
    async def test_writable_stream(self) -> None:
        request = Request("/", "get")
        request.body.write("hello ")
        request.body.end("world")
        assert await request.body.read() == b"hello world"


class TestToString:
    def test_renders_fields(self) -> None:
        request = Request("/A", "get", headers={"hello": "world"})
        request.set_body("hi")
        compact = "".join(request.to_string().split())
        assert compact == 'Request:{"method":"get","path":"/a","headers":{"hello":"world"},"body":"hi"}'

    def test_masks_sensitive(self) -> None:
        request = Request(
            "/login",
            "post",
            headers={"Authorization": "secret-token"},
            sensitive={"headers": ["authorization"], "body": ["password"]},
        )
        request.set_body({"user": "bob", "password": "1234"})

        compact = "".join(str(request).split())
        assert '"authorization":"**********"' in compact
        assert '"password":"**********"' in compact
        assert request.get_header("authorization") == "secret-token"
        assert request.get_body()["password"] == "1234"

    def test_repr(self) -> None:
        assert repr(Request("/a", "get")) == "<Request GET /a>"

    def test_str_is_to_string(self) -> None:
        request = Request("/a", "get")
        assert str(request) == request.to_string()

    def test_base_message_has_no_rendering(self) -> None:
        assert not hasattr(Message(), "to_string")
