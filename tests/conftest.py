"""
pytest Fixtures for Bookstore Tests

Shared fixtures used across all test files.

For database tests, we use:
- session scope for the engine (expensive to create)
- function scope for sessions (rolled back after each test)

Client-side tests talk to the real FastAPI app through
httpx.ASGITransport, or to httpx.MockTransport when a test needs
to simulate endpoints that are down.
"""

# =============================================================================
# TEST ENVIRONMENT SETUP
# =============================================================================
# IMPORTANT: Set environment variables BEFORE importing the app
import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_TABLES"] = "false"
os.environ["API_ENDPOINTS"] = "http://testserver/api"

from collections.abc import Generator
from decimal import Decimal

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from bookstore.client import ApiResolver, BookstoreClient
from bookstore.client.sample_data import SAMPLE_BOOKS, sample_books
from bookstore.database import Base, get_db
from bookstore.main import app
from bookstore.models import Book
from bookstore.schemas import BookResponse

API_BASE_URL = "http://testserver/api"


# =============================================================================
# DATABASE FIXTURES
# =============================================================================
@pytest.fixture(scope="session")
def engine():
    """
    Create a SQLite in-memory database engine.

    StaticPool keeps the connection alive for the entire session.
    Without it, SQLite in-memory database would disappear between connections.
    """
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db_session(engine) -> Generator[Session, None, None]:
    """
    Create a fresh database session for each test.

    The session is wrapped in a transaction that's rolled back,
    ensuring test isolation without needing to recreate tables.
    """
    TestSessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
    )

    connection = engine.connect()
    transaction = connection.begin()
    session = TestSessionLocal(bind=connection)

    yield session

    session.close()
    transaction.rollback()
    connection.close()


@pytest.fixture(scope="function")
def override_db(db_session: Session) -> Generator[None, None, None]:
    """Point the app's get_db dependency at the test session."""

    def override_get_db():
        try:
            yield db_session
        finally:
            pass  # Session cleanup handled by db_session fixture

    app.dependency_overrides[get_db] = override_get_db
    yield
    app.dependency_overrides.clear()


@pytest.fixture(scope="function")
def client(override_db) -> Generator[TestClient, None, None]:
    """Create a test client bound to the test database."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(scope="function")
def api_transport(override_db) -> httpx.ASGITransport:
    """
    httpx transport that sends requests straight into the FastAPI app.

    Lets BookstoreClient and ApiResolver run against the real API
    without a server.
    """
    return httpx.ASGITransport(app=app)


@pytest.fixture
def down_transport() -> httpx.MockTransport:
    """httpx transport where every endpoint refuses connections."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    return httpx.MockTransport(handler)


# =============================================================================
# SAMPLE DATA FIXTURES
# =============================================================================
@pytest.fixture
def sample_catalog(db_session: Session) -> list[Book]:
    """
    Store the ten sample books with their sample ids (1-10).

    Categories: Software (1-3), Biography (4-5), Self-Help (6-7), Classic (8-10).
    """
    books = [Book(**record) for record in SAMPLE_BOOKS]
    db_session.add_all(books)
    db_session.commit()
    for book in books:
        db_session.refresh(book)
    return books


@pytest.fixture
def sample_book(db_session: Session) -> Book:
    """Create a single book for CRUD tests."""
    book = Book(
        title="Clean Code",
        author="Robert C. Martin",
        publisher="Prentice Hall",
        isbn="978-0132350884",
        classification="Non-Fiction",
        category="Software",
        page_count=464,
        price=Decimal("39.99"),
    )
    db_session.add(book)
    db_session.commit()
    db_session.refresh(book)
    return book


@pytest.fixture
def book_payload() -> dict:
    """A valid camelCase request body for POST /api/Books."""
    return {
        "title": "Refactoring",
        "author": "Martin Fowler",
        "publisher": "Addison-Wesley",
        "isbn": "978-0134757599",
        "classification": "Non-Fiction",
        "category": "Software",
        "pageCount": 448,
        "price": 47.99,
    }


@pytest.fixture
def books() -> list[BookResponse]:
    """The sample catalog as client-side Book objects."""
    return sample_books()


# =============================================================================
# CLIENT FIXTURES
# =============================================================================
@pytest_asyncio.fixture
async def live_client(api_transport) -> BookstoreClient:
    """BookstoreClient whose only endpoint is the in-process API."""
    resolver = ApiResolver(endpoints=[API_BASE_URL], transport=api_transport)
    async with BookstoreClient(resolver=resolver, transport=api_transport) as client:
        yield client


@pytest_asyncio.fixture
async def offline_client(down_transport) -> BookstoreClient:
    """BookstoreClient for which every endpoint is down."""
    resolver = ApiResolver(
        endpoints=["http://localhost:5300/api", "http://localhost:7300/api"],
        transport=down_transport,
    )
    async with BookstoreClient(resolver=resolver, transport=down_transport) as client:
        yield client
