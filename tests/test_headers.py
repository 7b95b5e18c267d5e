"""Tests for superrouter.http.headers — case-insensitive header map."""

import pytest

from superrouter.http.headers import Headers


class TestHeaders:
    def test_case_insensitive_get(self) -> None:
        headers = Headers({"Content-Type": "text/html"})
        assert headers["content-type"] == "text/html"
        assert headers["CONTENT-TYPE"] == "text/html"
        assert headers.get("Content-type") == "text/html"

    def test_keys_stored_lowercase(self) -> None:
        headers = Headers({"X-A": "1", "X-B": "2"})
        assert list(headers) == ["x-a", "x-b"]

    def test_overwrite_keeps_position(self) -> None:
        headers = Headers()
        headers["A"] = "1"
        headers["B"] = "2"
        headers["a"] = "3"
        assert headers.to_dict() == {"a": "3", "b": "2"}

    def test_contains(self) -> None:
        headers = Headers({"X-Thing": "y"})
        assert "x-thing" in headers
        assert "X-THING" in headers
        assert "other" not in headers
        assert 7 not in headers

    def test_delete(self) -> None:
        headers = Headers({"X-A": "1"})
        del headers["x-A"]
        assert len(headers) == 0

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            Headers()["nope"]

    def test_rejects_non_string_key(self) -> None:
        with pytest.raises(TypeError, match="key must be a string"):
            Headers()[1] = "x"  # type: ignore[index]

    def test_rejects_non_string_value(self) -> None:
        with pytest.raises(TypeError, match="value must be a string"):
            Headers()["x"] = 1  # type: ignore[assignment]

    def test_copy_is_independent(self) -> None:
        headers = Headers({"a": "1"})
        clone = headers.copy()
        clone["b"] = "2"
        assert "b" not in headers

    def test_equality_with_dict(self) -> None:
        assert Headers({"A": "1"}) == {"a": "1"}
