"""
Shared test fixtures and configuration for entire test suite.

Provides: an admin pool wired with list/show fields, template environments,
translator fake and an in-memory async database
Dependencies: pytest, sqlalchemy, jinja2
System role: Test infrastructure and fixture management
"""

from unittest.mock import MagicMock

import pytest
from jinja2 import DictLoader

from backoffice.admin.admin import Admin
from backoffice.admin.pool import Pool
from backoffice.boundary.db.base import Base
from backoffice.configs.rendering import RenderingSettings
from backoffice.templating.environment import create_environment

from sample_models import STATUS_CHOICES, Address, Author, Book, Tag


@pytest.fixture
def author() -> Author:
    return Author("Frank Herbert", Address("Tacoma"))


@pytest.fixture
def book(author: Author) -> Book:
    return Book(7, "Dune", author=author, tags=[Tag("scifi"), Tag("classic")], price=9.5)


@pytest.fixture
def other_book() -> Book:
    return Book(8, "Emma", author=Author("Jane Austen"), status="published")


@pytest.fixture
def author_admin() -> Admin:
    admin = Admin("author", Author, label="Authors")
    admin.add_list_field("name", type="string")
    admin.add_show_field("name", type="string")
    return admin


@pytest.fixture
def book_admin(author_admin: Admin) -> Admin:
    admin = Admin("book", Book, label="Books")
    admin.add_list_field("title", type="string")
    admin.add_list_field("author", type="many_to_one", association_admin=author_admin)
    admin.add_list_field("tags", type="many_to_many", options={"associated_property": "label"})
    admin.add_list_field(
        "status",
        type="choice",
        options={"editable": True, "choices": dict(STATUS_CHOICES)},
    )
    admin.add_show_field("title", type="string")
    admin.add_show_field("author.name", type="string")
    admin.add_show_field("price", type="decimal")
    return admin


@pytest.fixture
def pool(author_admin: Admin, book_admin: Admin) -> Pool:
    pool = Pool()
    pool.add_admin(author_admin)
    pool.add_admin(book_admin)
    return pool


@pytest.fixture
def test_templates() -> dict[str, str]:
    """Small templates giving predictable output."""
    return {
        "field.html": "{{ value }}",
        "list_field.html": "L:{{ value }}",
        "show_field.html": "S:{{ value }}",
        "compare_field.html": "{{ value }}|{{ value_compare }}|{{ is_diff }}",
        "lower_field.html": (
            "{% if is_diff is defined %}{{ is_diff }}{% else %}{{ value|lower }}{% endif %}"
        ),
        "context_field.html": "{{ value }}|{{ extra }}|{{ object.title }}|{{ admin.code }}",
    }


@pytest.fixture
def environment(pool: Pool, test_templates: dict[str, str]):
    """Environment with the admin filters and the small test templates."""
    return create_environment(
        pool,
        RenderingSettings(debug=False),
        loaders=[DictLoader(test_templates)],
    )


@pytest.fixture
def debug_environment(pool: Pool, test_templates: dict[str, str]):
    """Environment rendering debug comments around fields."""
    return create_environment(
        pool,
        RenderingSettings(debug=True, base_show_template="show_field.html"),
        loaders=[DictLoader(test_templates)],
    )


@pytest.fixture
def translator() -> MagicMock:
    """Translator prefixing messages with their domain."""
    translator = MagicMock()
    translator.trans.side_effect = lambda message, parameters, domain: f"{domain}:{message}"
    return translator


@pytest.fixture
async def test_async_db():
    """
    Create in-memory SQLite async database for testing.

    Yields:
        AsyncSession: Test database session with cleanup
    """
    from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
    from sqlalchemy.pool import StaticPool

    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async_session = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    async with async_session() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()
