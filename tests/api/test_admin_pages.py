import logging

import pytest
from fastapi.testclient import TestClient
from unittest.mock import AsyncMock, MagicMock

from backoffice.admin.admin import Admin
from backoffice.admin.model_manager import ModelManager
from backoffice.admin.pool import Pool
from backoffice.api.deps.dependencies import get_template_cache
from backoffice.api.main import create_app
from backoffice.boundary.db import get_async_db
from backoffice.core.exceptions import ObjectNotFoundError

from sample_models import Tag


@pytest.fixture(autouse=True)
def clear_template_cache():
    get_template_cache().clear()
    yield
    get_template_cache().clear()


@pytest.fixture
def books(book, other_book):
    return {"7": book, "8": other_book}


@pytest.fixture
def model_manager(books):
    manager = MagicMock(spec=ModelManager)
    manager.find_all = AsyncMock(return_value=list(books.values()))

    async def find(session, urlsafe_id, load_paths=None):
        if urlsafe_id not in books:
            raise ObjectNotFoundError(urlsafe_id)
        return books[urlsafe_id]

    manager.find = AsyncMock(side_effect=find)
    manager.get_urlsafe_identifier.side_effect = lambda obj: str(obj.id)
    return manager


@pytest.fixture
def client(pool: Pool, book_admin: Admin, model_manager):
    book_admin.model_manager = model_manager
    app = create_app(pool)
    app.dependency_overrides[get_async_db] = lambda: None
    return TestClient(app)


def test_list_page(client, model_manager):
    response = client.get("/api/v1/admin/book/list?limit=10&offset=0")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "<th>Title</th>" in response.text
    assert ">Dune</td>" in response.text
    assert ">Emma</td>" in response.text
    assert ">Frank Herbert</td>" in response.text
    assert ">scifi, classic</td>" in response.text
    assert 'data-type="select"' in response.text
    assert 'data-pk="8"' in response.text
    model_manager.find_all.assert_awaited_once_with(
        None,
        limit=10,
        offset=0,
        load_paths=[["title"], ["author"], ["tags", "label"], ["status"]],
    )


def test_list_page_without_rows(client, model_manager):
    model_manager.find_all.return_value = []

    response = client.get("/api/v1/admin/book/list")

    assert response.status_code == 200
    assert "No result" in response.text


def test_list_page_unknown_admin(client):
    response = client.get("/api/v1/admin/magazine/list")

    assert response.status_code == 404
    assert response.json()["detail"] == "Admin not found: magazine"


def test_show_page(client):
    response = client.get("/api/v1/admin/book/7/show")

    assert response.status_code == 200
    assert "<h1>Books 7</h1>" in response.text
    assert "<th>Title</th>" in response.text
    assert "<td>Dune</td>" in response.text
    assert "<th>Author name</th>" in response.text
    assert "<td>Frank Herbert</td>" in response.text
    assert "<td>9.5</td>" in response.text


def test_show_page_unknown_object(client):
    response = client.get("/api/v1/admin/book/99/show")

    assert response.status_code == 404
    assert response.json()["detail"] == "Object not found: 99"


def test_compare_page(client):
    response = client.get("/api/v1/admin/book/7/compare/8")

    assert response.status_code == 200
    assert '<th class="diff">Title</th>' in response.text
    assert "<td>Dune</td>" in response.text
    assert "<td>Emma</td>" in response.text


def test_compare_page_same_object_has_no_diff(client):
    response = client.get("/api/v1/admin/book/7/compare/7")

    assert response.status_code == 200
    assert 'class="diff"' not in response.text


def test_list_page_with_misconfigured_relation(client, book_admin: Admin, books):
    books["7"].author = Tag("not printable")

    response = client.get("/api/v1/admin/book/list")

    assert response.status_code == 500
    assert "associated_property" in response.json()["detail"]


def test_xeditable_field(client):
    response = client.get("/api/v1/admin/book/xeditable/status")

    assert response.status_code == 200
    assert response.json() == {
        "admin_code": "book",
        "field": "status",
        "type": "select",
        "choices": [
            {"value": "draft", "text": "Draft"},
            {"value": "published", "text": "Published"},
        ],
    }


def test_xeditable_unmapped_field_type(client):
    response = client.get("/api/v1/admin/book/xeditable/tags")

    assert response.status_code == 200
    assert response.json()["type"] is None
    assert response.json()["choices"] == []


def test_xeditable_unknown_field(client):
    response = client.get("/api/v1/admin/book/xeditable/isbn")

    assert response.status_code == 404


def test_unexpected_error_hides_its_message(client, model_manager, caplog):
    model_manager.find_all.side_effect = RuntimeError("SELECT * FROM secret_table")

    with caplog.at_level(logging.ERROR):
        response = client.get("/api/v1/admin/book/list")

    assert response.status_code == 500
    assert response.json()["detail"] == "An internal error occurred while rendering the admin page"
    assert "secret_table" not in response.text
    assert "Unexpected failure in admin page" in caplog.text
