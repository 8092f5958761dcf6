# tests/test_store.py
import pytest
from sqlalchemy import inspect

from local_library.errors import EntityNotFound
from local_library.models import Author, Book, BookInstance, Genre


def test_find_by_id_missing_returns_none(store):
    assert store.find_by_id(Genre, "missing") is None
    assert store.find_by_id(Genre, "") is None


def test_get_missing_raises_not_found(store):
    with pytest.raises(EntityNotFound) as excinfo:
        store.get(Author, "missing")
    assert excinfo.value.code == 404
    assert excinfo.value.kind == "Author"
    assert excinfo.value.description == "Author not found"


def test_insert_assigns_identifier(store):
    genre = store.insert(Genre(name="Poetry"))
    assert len(genre.id) == 32
    assert store.get(Genre, genre.id).name == "Poetry"


def test_find_filters_and_orders(store, make_genre):
    make_genre("Poetry")
    make_genre("Fantasy")
    make_genre("Horror")
    names = [genre.name for genre in store.find(Genre, Genre.name != "Horror", order_by=[Genre.name])]
    assert names == ["Fantasy", "Poetry"]


def test_find_limits_loaded_columns(store, make_book):
    book = make_book()
    store.session.expire_all()
    [loaded] = store.find(Book, fields=("title",))
    assert loaded.id == book.id
    assert "summary" in inspect(loaded).unloaded
    assert "title" not in inspect(loaded).unloaded


def test_find_populates_relationships(store, make_book, make_genre):
    make_book(genres=[make_genre("Romance")])
    store.session.expire_all()
    [loaded] = store.find(Book, populate=("author", "genres"))
    state = inspect(loaded)
    assert "author" not in state.unloaded
    assert "genres" not in state.unloaded
    assert loaded.author.family_name == "Austen"


def test_find_many_skips_unknown_ids(store, make_genre):
    poetry = make_genre("Poetry")
    assert store.find_many(Genre, [poetry.id, "missing"]) == [poetry]
    assert store.find_many(Genre, []) == []


def test_count_with_criteria(store, make_instance):
    make_instance(status="Available")
    make_instance(status="Loaned")
    assert store.count(BookInstance) == 2
    assert store.count(BookInstance, BookInstance.status == "Available") == 1


def test_update_copies_columns_onto_stored_document(store, reload, make_author):
    author = make_author()
    saved = store.update(Author(id=author.id, first_name="Cassandra", family_name="Austen"))
    assert saved is author
    assert reload(Author, author.id).first_name == "Cassandra"
    assert store.count(Author) == 1


def test_update_replaces_named_relationships(store, reload, make_book, make_genre):
    comedy = make_genre("Comedy")
    book = make_book(genres=[make_genre("Romance")])
    candidate = Book(id=book.id, title=book.title, summary=book.summary, isbn=book.isbn, author_id=book.author_id)
    candidate.genres = [comedy]
    store.update(candidate, relationships=("genres",))
    assert [genre.name for genre in reload(Book, book.id, populate=("genres",)).genres] == ["Comedy"]


def test_update_missing_raises_not_found(store):
    with pytest.raises(EntityNotFound):
        store.update(Genre(id="missing", name="Poetry"))


def test_delete(store, make_genre):
    genre = make_genre()
    store.delete(genre)
    assert store.count(Genre) == 0


def test_genre_name_key_follows_name(store, reload, make_genre):
    genre = make_genre("Straße")
    assert genre.name_key == "strasse"
    store.update(Genre(id=genre.id, name="ÉPOPÉE"))
    assert reload(Genre, genre.id).name_key == "épopée"
