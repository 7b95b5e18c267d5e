"""Shared pytest configuration for superrouter examples.

``example_app`` loads a fresh App from the ``app.py`` next to the test,
re-executing it in an isolated module namespace so every test starts
with clean state. ``dispatch`` sends one request through that app and
decodes the JSON response body.
"""

import importlib.util
import json
from pathlib import Path

import pytest

from superrouter import Request


async def _stream(data: bytes):
    yield data


@pytest.fixture
def example_app(request: pytest.FixtureRequest):
    """Load a fresh App from the sibling app.py next to the test file."""
    app_path = Path(request.path).parent / "app.py"
    spec = importlib.util.spec_from_file_location(f"example_{app_path.parent.name}", app_path)
    assert spec is not None and spec.loader is not None
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module.app


@pytest.fixture
def dispatch(example_app):
    """``await dispatch(method, path, body=...)`` -> ``(response, decoded_body)``.

    *body* may be raw bytes or any JSON-serializable value.
    """

    async def send(method: str, path: str, body: object = b""):
        raw = body if isinstance(body, bytes) else json.dumps(body).encode()
        response = await example_app.process_request(Request(path, method, body=_stream(raw)))
        return response, json.loads(response.get_body())

    return send
