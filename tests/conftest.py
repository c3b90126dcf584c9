import itertools

import pytest

from library_api import create_app
from library_api.config import Config
from library_api.extensions import db
from library_api.models import Author, Book, Category
from library_api.services.auth_service import AuthService

PASSWORD = "password123"


@pytest.fixture
def app(tmp_path):
    class TestingConfig(Config):
        TESTING = True
        SQLALCHEMY_DATABASE_URI = f"sqlite:///{tmp_path / 'library.db'}"
        SQLALCHEMY_ENGINE_OPTIONS = {}
        JWT_SECRET_KEY = "test-secret-key-that-is-long-enough-for-hs256"
        MAIL_SUPPRESS_SEND = True
        PER_PAGE = 10

    app = create_app(TestingConfig)
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def users(app):
    return {
        role: AuthService.register(name=role.title(), email=f"{role}@library.test",
                                   password=PASSWORD, role=role)
        for role in ("admin", "librarian", "member")
    }


@pytest.fixture
def auth(users):
    """auth("member") -> Authorization header for that user."""
    def _headers(role="librarian"):
        return {"Authorization": f"Bearer {AuthService.issue_token(users[role])}"}
    return _headers


@pytest.fixture
def make_book(app):
    counter = itertools.count(1)

    def _make(total=1, available=None, title=None, **fields):
        n = next(counter)
        book = Book(
            title=title or f"Book {n}",
            isbn=f"978-0-00-{n:06d}",
            publication_year=1990 + n,
            total_copies=total,
            available_copies=total if available is None else available,
            **fields,
        )
        book.authors = [Author(name=f"Author {n}")]
        book.categories = [Category(name=f"Category {n}")]
        db.session.add(book)
        db.session.commit()
        return book

    return _make


@pytest.fixture
def fresh(app):
    """Re-read a row from the database, bypassing the identity map."""
    def _fresh(model, pk):
        db.session.expire_all()
        return db.session.get(model, pk)
    return _fresh
