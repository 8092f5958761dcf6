# tests/test_forms.py
from datetime import date

import pytest
from werkzeug.datastructures import MultiDict

from local_library.forms import (
    AuthorForm,
    BookForm,
    BookInstanceForm,
    FieldError,
    GenreForm,
    as_list,
    collect_errors,
    escape_markup,
)


@pytest.fixture
def request_ctx(app):
    with app.test_request_context(method="POST"):
        yield


def submit(form_class, **fields):
    data = MultiDict()
    for name, value in fields.items():
        for item in as_list(value):
            data.add(name, item)
    return form_class(formdata=data)


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, []),
        ("abc", ["abc"]),
        (["a", "b"], ["a", "b"]),
        (("a",), ["a"]),
    ],
)
def test_as_list_normalizes_absent_scalar_and_collection(value, expected):
    assert as_list(value) == expected


def test_escape_markup_neutralizes_tags():
    assert escape_markup("<script>x</script>") == "&lt;script&gt;x&lt;/script&gt;"
    assert escape_markup("plain") == "plain"
    assert escape_markup(None) is None


def test_fields_are_trimmed(request_ctx):
    form = submit(GenreForm, name="   Poetry  ")
    assert form.validate()
    assert form.name.data == "Poetry"


def test_genre_name_too_short(request_ctx):
    form = submit(GenreForm, name=" ab ")
    assert not form.validate()
    assert collect_errors(form) == [FieldError("name", "Genre name must contain at least 3 characters")]


def test_author_first_failure_message_wins(request_ctx):
    form = submit(AuthorForm, first_name="", family_name="O'Brien")
    assert not form.validate()
    assert collect_errors(form) == [
        FieldError("first_name", "First name must be specified."),
        FieldError("family_name", "Family name has non-alphanumeric characters."),
    ]


def test_author_optional_dates(request_ctx):
    form = submit(AuthorForm, first_name="Jane", family_name="Austen", date_of_birth="1775-12-16", date_of_death="")
    assert form.validate()
    assert form.date_of_birth.data == date(1775, 12, 16)
    assert form.date_of_death.data is None


def test_author_invalid_date(request_ctx):
    form = submit(AuthorForm, first_name="Jane", family_name="Austen", date_of_birth="16/12/1775")
    assert not form.validate()
    assert collect_errors(form) == [FieldError("date_of_birth", "Invalid date of birth")]


def test_book_reports_every_failing_field(request_ctx):
    form = submit(BookForm, title="  ", author="", summary="", isbn="")
    assert not form.validate()
    assert [error.message for error in collect_errors(form)] == [
        "Title must not be empty.",
        "Author must not be empty.",
        "Summary must not be empty.",
        "ISBN must not be empty",
    ]


def test_book_genre_absent_is_empty_list(request_ctx):
    form = submit(BookForm, title="T", author="a1", summary="S", isbn="1")
    assert form.validate()
    assert form.genre.data == []


def test_book_genre_scalar_and_many(request_ctx):
    assert submit(BookForm, genre="g1").genre.data == ["g1"]
    assert submit(BookForm, genre=["g1", "g2"]).genre.data == ["g1", "g2"]


def test_book_unknown_author(request_ctx):
    form = submit(BookForm, title="T", author="missing", summary="S", isbn="1")
    form.author_ids = {"a1"}
    assert not form.validate()
    assert collect_errors(form) == [FieldError("author", "Author not found")]


def test_bookinstance_invalid_date_and_status(request_ctx):
    form = submit(BookInstanceForm, book="b1", imprint="Penguin", status="Lost", due_back="not-a-date")
    assert not form.validate()
    assert collect_errors(form) == [
        FieldError("status", "Invalid status"),
        FieldError("due_back", "Invalid date"),
    ]


def test_bookinstance_status_may_be_omitted(request_ctx):
    form = submit(BookInstanceForm, book="b1", imprint="Penguin")
    assert form.validate()
    assert form.due_back.data is None


def test_genre_length_measures_input_before_escaping(request_ctx):
    too_short = submit(GenreForm, name="<>")
    assert not too_short.validate()
    assert collect_errors(too_short) == [FieldError("name", "Genre name must contain at least 3 characters")]

    near_limit = submit(GenreForm, name="A" * 97 + "&")
    assert near_limit.validate()
    assert near_limit.name.data == "A" * 97 + "&amp;"


def test_author_max_length_counts_typed_characters(request_ctx):
    assert submit(AuthorForm, first_name="A" * 100, family_name="Austen").validate()
    form = submit(AuthorForm, first_name="A" * 101, family_name="Austen")
    assert not form.validate()
    assert collect_errors(form) == [FieldError("first_name", "First name must be at most 100 characters.")]


def test_text_is_escaped_after_validation(request_ctx):
    form = submit(BookForm, title="Pride & Prejudice", author="a1", summary="<b>bold</b>", isbn="1")
    assert form.validate()
    assert form.title.data == "Pride &amp; Prejudice"
    assert form.summary.data == "&lt;b&gt;bold&lt;/b&gt;"
