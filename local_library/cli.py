"""Flask CLI commands: ``init-db`` and ``seed``."""

from datetime import date

import click

from .models import Author, Book, BookInstance, Genre


def seed_catalog(store):
    """Insert a small sample catalog; does nothing if any author exists."""
    if store.count(Author):
        return False
    austen = Author(first_name="Jane", family_name="Austen", date_of_birth=date(1775, 12, 16), date_of_death=date(1817, 7, 18))
    twain = Author(first_name="Mark", family_name="Twain", date_of_birth=date(1835, 11, 30), date_of_death=date(1910, 4, 21))
    fiction = Genre(name="Fiction")
    satire = Genre(name="Satire")
    pride = Book(
        title="Pride and Prejudice",
        summary="A classic novel of manners.",
        isbn="9780141439518",
        author=austen,
        genres=[fiction],
    )
    finn = Book(
        title="Adventures of Huckleberry Finn",
        summary="A classic American novel.",
        isbn="9780486280615",
        author=twain,
        genres=[fiction, satire],
    )
    store.session.add_all([austen, twain, fiction, satire, pride, finn])
    store.session.add_all(
        [
            BookInstance(book=pride, imprint="Penguin Classics, 2003", status="Available"),
            BookInstance(book=pride, imprint="Penguin Classics, 2003", status="Loaned", due_back=date.today()),
            BookInstance(book=finn, imprint="Dover Thrift, 1994", status="Maintenance"),
        ]
    )
    store.session.commit()
    return True


def register_commands(app, store):
    @app.cli.command("init-db")
    def init_db():
        """Create the catalog tables."""
        store.create_schema()
        click.echo("Initialized the database.")

    @app.cli.command("seed")
    def seed():
        """Add sample data (for dev only)."""
        store.create_schema()
        if seed_catalog(store):
            click.echo("Initialized DB with sample data.")
        else:
            click.echo("DB already initialized.")
