"""
Pytest configuration and shared fixtures.
"""

from typing import Dict, Iterable, List, Optional

import pytest
from fastapi.testclient import TestClient

from api.dependencies import (
    get_author_store,
    get_book_store,
    get_job_dispatcher,
    get_token_service,
    get_user_store,
)
from api.main import app
from api.tokens import TokenService
from storage.models import Author, AuthorCreate, Book, BookCreate, User

TEST_SECRET = "test-secret-for-books-api-signing-0123456789"


class InMemoryAuthorStore:
    """Dict-backed stand-in for AuthorStore."""

    def __init__(self):
        self.authors: Dict[int, Author] = {}
        self.fail_with: Optional[Exception] = None

    async def create(self, author: AuthorCreate) -> Author:
        if self.fail_with is not None:
            raise self.fail_with
        return self.add(author)

    def add(self, author: AuthorCreate) -> Author:
        stored = Author(id=len(self.authors) + 1, **author.model_dump())
        self.authors[stored.id] = stored
        return stored

    async def get_many(self, author_ids: Iterable[int]) -> Dict[int, Author]:
        return {author_id: self.authors[author_id] for author_id in set(author_ids) if author_id in self.authors}

    async def count(self) -> int:
        return len(self.authors)


class InMemoryBookStore:
    """Dict-backed stand-in for BookStore with never-reused ids."""

    def __init__(self):
        self.books: Dict[int, Book] = {}
        self._last_id = 0

    async def create(self, book: BookCreate) -> Book:
        return self.add(book)

    def add(self, book: BookCreate) -> Book:
        self._last_id += 1
        stored = Book(id=self._last_id, **book.model_dump())
        self.books[stored.id] = stored
        return stored

    async def list(self, limit: int, offset: int = 0) -> List[Book]:
        ordered = [self.books[book_id] for book_id in sorted(self.books)]
        return ordered[offset:offset + limit]

    async def delete(self, book_id: int) -> bool:
        return self.books.pop(book_id, None) is not None

    async def count(self) -> int:
        return len(self.books)


class InMemoryUserStore:
    """Dict-backed stand-in for UserStore."""

    def __init__(self):
        self.users: Dict[int, User] = {}

    def add(self, username: str) -> User:
        user = User(id=len(self.users) + 1, username=username)
        self.users[user.id] = user
        return user

    async def get(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)


class RecordingDispatcher:
    """Stand-in for JobDispatcher that records submissions."""

    def __init__(self, accept: bool = True):
        self.accept = accept
        self.submitted = []

    def submit(self, name, *args) -> bool:
        self.submitted.append((name, args))
        return self.accept


@pytest.fixture
def token_secret():
    return TEST_SECRET


@pytest.fixture
def token_service(token_secret):
    return TokenService(token_secret)


@pytest.fixture
def author_store():
    return InMemoryAuthorStore()


@pytest.fixture
def book_store():
    return InMemoryBookStore()


@pytest.fixture
def user_store():
    return InMemoryUserStore()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


@pytest.fixture
def user(user_store):
    return user_store.add("reader")


@pytest.fixture
def auth_headers(token_service, user):
    """Authorization header in the Token scheme for an existing user."""
    return {"Authorization": f"Token token={token_service.issue(user.id)}"}


@pytest.fixture
def seed_book(author_store, book_store):
    """Store a book and its author directly, bypassing the API."""
    def _seed(title: str, first_name: str, last_name: str, age: int) -> Book:
        author = author_store.add(AuthorCreate(first_name=first_name, last_name=last_name, age=age))
        return book_store.add(BookCreate(title=title, author_id=author.id))
    return _seed


@pytest.fixture
def make_client(token_service, author_store, book_store, user_store, dispatcher):
    """Build test clients wired to the in-memory services."""
    app.dependency_overrides[get_token_service] = lambda: token_service
    app.dependency_overrides[get_author_store] = lambda: author_store
    app.dependency_overrides[get_book_store] = lambda: book_store
    app.dependency_overrides[get_user_store] = lambda: user_store
    app.dependency_overrides[get_job_dispatcher] = lambda: dispatcher
    yield lambda **kwargs: TestClient(app, **kwargs)
    app.dependency_overrides.clear()


@pytest.fixture
def client(make_client):
    """Create test client."""
    return make_client()
