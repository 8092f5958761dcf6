"""SQLAlchemy models for the catalog: Genre, Author, Book and BookInstance.

Identifiers are opaque hex UUIDs assigned on insert. References between
entities are plain foreign keys; dependents are looked up explicitly by the
controllers, so no model declares a reverse collection.
"""

import uuid
from datetime import date

from flask_sqlalchemy import SQLAlchemy
from sqlalchemy.orm import validates

db = SQLAlchemy()

BOOK_INSTANCE_STATUSES = ("Available", "Maintenance", "Loaned", "Reserved")
DEFAULT_STATUS = "Maintenance"


def new_id():
    return uuid.uuid4().hex


def format_date(value):
    """Medium date format, e.g. ``Oct 18, 2026``."""
    if value is None:
        return ""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def iso_date(value):
    return value.isoformat() if value else ""


def genre_key(name):
    """Case-insensitive lookup key for a genre name (full Unicode folding)."""
    return (name or "").casefold()


book_genres = db.Table(
    "book_genres",
    db.Column("book_id", db.String(32), db.ForeignKey("books.id"), primary_key=True),
    db.Column("genre_id", db.String(32), db.ForeignKey("genres.id"), primary_key=True),
)


class Genre(db.Model):
    __tablename__ = "genres"
    display_name = "Genre"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    # escaped text, so wider than the 100 characters a user may type
    name = db.Column(db.String(500), nullable=False, index=True)
    # casefolded name; genres may not differ only by case
    name_key = db.Column(db.String(500), nullable=False, unique=True, index=True)

    @validates("name")
    def _fill_name_key(self, key, value):
        self.name_key = genre_key(value)
        return value

    @property
    def url(self):
        return f"/catalog/genre/{self.id}"

    def __repr__(self):
        return f"<Genre {self.id} {self.name!r}>"


class Author(db.Model):
    __tablename__ = "authors"
    display_name = "Author"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    first_name = db.Column(db.String(100), nullable=False)
    family_name = db.Column(db.String(100), nullable=False, index=True)
    date_of_birth = db.Column(db.Date, nullable=True)
    date_of_death = db.Column(db.Date, nullable=True)

    @property
    def name(self):
        if self.first_name and self.family_name:
            return f"{self.family_name}, {self.first_name}"
        return ""

    @property
    def lifespan(self):
        if self.date_of_birth is None and self.date_of_death is None:
            return ""
        return f"{format_date(self.date_of_birth)} - {format_date(self.date_of_death)}"

    @property
    def date_of_birth_yyyy_mm_dd(self):
        return iso_date(self.date_of_birth)

    @property
    def date_of_death_yyyy_mm_dd(self):
        return iso_date(self.date_of_death)

    @property
    def url(self):
        return f"/catalog/author/{self.id}"

    def __repr__(self):
        return f"<Author {self.id} {self.name!r}>"


class Book(db.Model):
    __tablename__ = "books"
    display_name = "Book"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    title = db.Column(db.String(500), nullable=False, index=True)
    summary = db.Column(db.Text, nullable=False)
    isbn = db.Column(db.String(64), nullable=False)
    author_id = db.Column(db.String(32), db.ForeignKey("authors.id"), nullable=False)

    author = db.relationship("Author")
    genres = db.relationship("Genre", secondary=book_genres, order_by="Genre.name")

    @property
    def url(self):
        return f"/catalog/book/{self.id}"

    def __repr__(self):
        return f"<Book {self.id} {self.title!r}>"


class BookInstance(db.Model):
    __tablename__ = "book_instances"
    display_name = "Book copy"

    id = db.Column(db.String(32), primary_key=True, default=new_id)
    book_id = db.Column(db.String(32), db.ForeignKey("books.id"), nullable=False, index=True)
    imprint = db.Column(db.String(500), nullable=False)
    status = db.Column(
        db.Enum(*BOOK_INSTANCE_STATUSES, name="book_instance_status", validate_strings=True),
        nullable=False,
        default=DEFAULT_STATUS,
    )
    due_back = db.Column(db.Date, nullable=False, default=date.today)

    book = db.relationship("Book")

    @property
    def due_back_formatted(self):
        return format_date(self.due_back)

    @property
    def due_back_yyyy_mm_dd(self):
        return iso_date(self.due_back)

    @property
    def url(self):
        return f"/catalog/bookinstance/{self.id}"

    def __repr__(self):
        return f"<BookInstance {self.id} {self.status}>"
