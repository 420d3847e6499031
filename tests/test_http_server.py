"""Tests for gldoc.services.http_server — route handlers and FastAPI app."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from fastapi.testclient import TestClient

from gldoc.ref.errors import NameNotFoundError
from gldoc.services.http_server import create_app, handle_entry, handle_func
from gldoc.services.registry import Registry, load_sources

if TYPE_CHECKING:
    from pathlib import Path


@pytest.fixture()
def registry(glfoo_corpus: Path) -> Registry:
    return load_sources(glfoo_corpus, "gl")


@pytest.fixture()
def client(registry: Registry) -> TestClient:
    return TestClient(create_app(registry))


# --- handler functions ---


class TestHandlers:
    def test_handle_entry_by_function_alias(self, registry: Registry) -> None:
        assert handle_entry(registry, "glUniform2f")["name"] == "glUniform"

    def test_handle_entry_unknown(self, registry: Registry) -> None:
        with pytest.raises(NameNotFoundError):
            handle_entry(registry, "glNope")

    def test_handle_func(self, registry: Registry) -> None:
        data = handle_func(registry, "glFoo")
        assert data["args"] == {
            "x": "Specifies the horizontal coordinate.",
            "y": "Specifies the vertical coordinate.",
        }

    def test_handle_func_rejects_entry_name(self, registry: Registry) -> None:
        with pytest.raises(NameNotFoundError):
            handle_func(registry, "glUniform")


# --- HTTP routes ---


class TestRoutes:
    def test_get_entry(self, client: TestClient) -> None:
        response = client.get("/entry/glFoo")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "glFoo"
        assert data["functions"] == [{"name": "glFoo", "args": ["x", "y"]}]
        assert data["seealso"] == ["glBar"]
        assert data["errors"] == ["GL_INVALID_ENUM", "GL_INVALID_VALUE"]

    def test_get_entry_trailing_slash(self, client: TestClient) -> None:
        response = client.get("/entry/glBegin/")
        assert response.status_code == 200
        assert response.json()["name"] == "glBegin"

    def test_get_entry_unknown(self, client: TestClient) -> None:
        response = client.get("/entry/glNope")
        assert response.status_code == 400
        assert response.text == "invalid function name\n"

    def test_get_func(self, client: TestClient) -> None:
        response = client.get("/glUniform1f")
        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "glUniform1f"
        assert data["desc"] == "Specify the value of a uniform variable"
        assert list(data["args"]) == ["location", "v0"]

    def test_get_func_trailing_slash(self, client: TestClient) -> None:
        assert client.get("/glEnd/").json()["args"] == {}

    def test_get_func_unknown(self, client: TestClient) -> None:
        response = client.get("/glNope")
        assert response.status_code == 400
        assert response.text == "invalid function name\n"

    def test_unrelated_lookup_error_is_server_error(self) -> None:
        class BrokenRegistry(Registry):
            def find(self, name: str) -> None:
                raise KeyError(name)

        client = TestClient(create_app(BrokenRegistry()), raise_server_exceptions=False)
        response = client.get("/entry/glFoo")
        assert response.status_code == 500
        assert response.text != "invalid function name\n"
