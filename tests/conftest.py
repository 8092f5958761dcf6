# tests/conftest.py
from datetime import date

import pytest

from local_library import create_app
from local_library.config import TestingConfig
from local_library.models import Author, Book, BookInstance, Genre


@pytest.fixture
def app():
    """A fresh application on its own in-memory database."""
    app = create_app(TestingConfig)
    yield app
    app.extensions["catalog_store"].shutdown()


@pytest.fixture
def store(app):
    """The application's store, with an app context pushed for the test."""
    with app.app_context():
        yield app.extensions["catalog_store"]


@pytest.fixture
def client(app, store):
    return app.test_client()


@pytest.fixture
def reload(store):
    """Fetch a document again, bypassing anything cached in the session."""

    def _reload(model, entity_id, populate=()):
        store.session.expire_all()
        return store.find_by_id(model, entity_id, populate=populate)

    return _reload


@pytest.fixture
def make_author(store):
    def _make(first_name="Jane", family_name="Austen", **kwargs):
        return store.insert(Author(first_name=first_name, family_name=family_name, **kwargs))

    return _make


@pytest.fixture
def make_genre(store):
    def _make(name="Fiction"):
        return store.insert(Genre(name=name))

    return _make


@pytest.fixture
def make_book(store, make_author):
    def _make(title="Pride and Prejudice", author=None, genres=(), **kwargs):
        author = author or make_author()
        book = Book(
            title=title,
            summary=kwargs.pop("summary", "A classic novel of manners."),
            isbn=kwargs.pop("isbn", "9780141439518"),
            author_id=author.id,
            **kwargs,
        )
        book.genres = list(genres)
        return store.insert(book)

    return _make


@pytest.fixture
def make_instance(store, make_book):
    def _make(book=None, imprint="Penguin Classics, 2003", status="Available", due_back=None):
        book = book or make_book()
        return store.insert(
            BookInstance(book_id=book.id, imprint=imprint, status=status, due_back=due_back or date.today())
        )

    return _make
