"""Form definitions and the field rules shared by every entity form.

Each submitted text field is trimmed, checked by its validators in order,
and only then markup-escaped, so length and pattern rules measure what the
user typed. ``DataRequired`` and ``Optional`` stop the chain for that
field, so the message of the first failing rule is the one reported.
Escaping happens in ``validate()``: build entities from a form only after
validating it. ``collect_errors`` flattens a validated form into the
ordered ``(field, message)`` list the templates display.
"""

from collections import namedtuple

import bleach
from dateutil.parser import isoparse
from flask_wtf import FlaskForm
from wtforms import Field, StringField, TextAreaField
from wtforms.validators import AnyOf, DataRequired, Length, Optional, Regexp, ValidationError
from wtforms.widgets import DateInput

from .models import BOOK_INSTANCE_STATUSES, DEFAULT_STATUS

ALPHANUMERIC = r"^[A-Za-z0-9]+$"

FieldError = namedtuple("FieldError", "field message")


# -----------------------
# Filters
# -----------------------
def strip(value):
    return value.strip() if isinstance(value, str) else value


def escape_markup(value):
    """Escape markup-significant characters; no tags are let through."""
    if isinstance(value, str):
        return bleach.clean(value, tags=set(), strip=False)
    return value


TEXT_FILTERS = [strip]


def as_list(value):
    """Normalize a multi-valued submission: absent -> [], scalar -> [scalar]."""
    if value is None:
        return []
    if isinstance(value, (list, tuple, set)):
        return list(value)
    return [value]


def collect_errors(form):
    """First message of every failing field, in declaration order."""
    return [FieldError(name, messages[0]) for name, messages in form.errors.items() if messages]


# -----------------------
# Fields
# -----------------------
class EscapeAfterValidation:
    """Escape ``data`` once every validator has checked the trimmed input."""

    def post_validate(self, form, validation_stopped):
        self.data = escape_markup(self.data)


class EscapedStringField(EscapeAfterValidation, StringField):
    pass


class EscapedTextAreaField(EscapeAfterValidation, TextAreaField):
    pass


class IsoDateField(Field):
    """Text input parsed as an ISO-8601 calendar date.

    An empty submission leaves ``data`` as ``None``; combine with
    ``Optional()`` for fields that may be left blank.
    """

    widget = DateInput()

    def __init__(self, label=None, validators=None, invalid_message="Invalid date", **kwargs):
        super().__init__(label, validators, **kwargs)
        self.invalid_message = invalid_message

    def _value(self):
        if self.raw_data:
            return " ".join(self.raw_data)
        return self.data.isoformat() if self.data else ""

    def process_formdata(self, valuelist):
        if not valuelist:
            return
        raw = valuelist[0].strip()
        if not raw:
            self.data = None
            return
        try:
            self.data = isoparse(raw).date()
        except (ValueError, OverflowError):
            self.data = None
            raise ValueError(self.invalid_message)


class MultiReferenceField(Field):
    """Zero or more referenced ids submitted under one name (checkboxes)."""

    def process_data(self, value):
        self.data = as_list(value)

    def process_formdata(self, valuelist):
        self.data = [escape_markup(strip(item)) for item in as_list(valuelist)]

    def _value(self):
        return self.data


# -----------------------
# Forms
# -----------------------
class GenreForm(FlaskForm):
    name = EscapedStringField(
        "Genre",
        filters=TEXT_FILTERS,
        validators=[Length(min=3, max=100, message="Genre name must contain at least 3 characters")],
    )


class AuthorForm(FlaskForm):
    first_name = EscapedStringField(
        "First name",
        filters=TEXT_FILTERS,
        validators=[
            DataRequired(message="First name must be specified."),
            Length(max=100, message="First name must be at most 100 characters."),
            Regexp(ALPHANUMERIC, message="First name has non-alphanumeric characters."),
        ],
    )
    family_name = EscapedStringField(
        "Family name",
        filters=TEXT_FILTERS,
        validators=[
            DataRequired(message="Family name must be specified."),
            Length(max=100, message="Family name must be at most 100 characters."),
            Regexp(ALPHANUMERIC, message="Family name has non-alphanumeric characters."),
        ],
    )
    date_of_birth = IsoDateField("Date of birth", validators=[Optional()], invalid_message="Invalid date of birth")
    date_of_death = IsoDateField("Date of death", validators=[Optional()], invalid_message="Invalid date of death")


class BookForm(FlaskForm):
    title = EscapedStringField(
        "Title", filters=TEXT_FILTERS, validators=[DataRequired(message="Title must not be empty.")]
    )
    author = EscapedStringField(
        "Author", filters=TEXT_FILTERS, validators=[DataRequired(message="Author must not be empty.")]
    )
    summary = EscapedTextAreaField(
        "Summary", filters=TEXT_FILTERS, validators=[DataRequired(message="Summary must not be empty.")]
    )
    isbn = EscapedStringField(
        "ISBN", filters=TEXT_FILTERS, validators=[DataRequired(message="ISBN must not be empty")]
    )
    genre = MultiReferenceField("Genre")

    # ids of the authors offered in the select; None skips the check
    author_ids = None

    def validate_author(self, field):
        if self.author_ids is not None and field.data not in self.author_ids:
            raise ValidationError("Author not found")


class BookInstanceForm(FlaskForm):
    book = EscapedStringField(
        "Book", filters=TEXT_FILTERS, validators=[DataRequired(message="Book must be specified")]
    )
    imprint = EscapedStringField(
        "Imprint", filters=TEXT_FILTERS, validators=[DataRequired(message="Imprint must be specified")]
    )
    status = EscapedStringField(
        "Status",
        default=DEFAULT_STATUS,
        filters=TEXT_FILTERS,
        validators=[Optional(), AnyOf(BOOK_INSTANCE_STATUSES, message="Invalid status")],
    )
    due_back = IsoDateField("Date when book available", validators=[Optional()], invalid_message="Invalid date")

    book_ids = None

    def validate_book(self, field):
        if self.book_ids is not None and field.data not in self.book_ids:
            raise ValidationError("Book not found")
