from ..forms import BookForm, collect_errors
from ..logs import get_logger
from ..models import Author, Book, BookInstance, Genre
from ..rendering import render
from .base import Controller

logger = get_logger("controllers.book")


class BookController(Controller):
    list_endpoint = "catalog.book_list"

    def _instances_of(self, book_id):
        return self.store.find(BookInstance, BookInstance.book_id == book_id)

    def _choices(self):
        """Authors and genres offered by the book form."""
        authors = self.store.find(Author, order_by=[Author.family_name, Author.first_name])
        genres = self.store.find(Genre, order_by=[Genre.name])
        return authors, genres

    def _bound_form(self, authors, **kwargs):
        form = BookForm(**kwargs)
        form.author_ids = {author.id for author in authors}
        return form

    @staticmethod
    def _candidate(form, entity_id=None):
        """Unsaved Book built from the sanitized form values."""
        return Book(
            id=entity_id,
            title=form.title.data,
            author_id=form.author.data or None,
            summary=form.summary.data,
            isbn=form.isbn.data,
        )

    def _form_page(self, title, form, book, authors, genres, errors=None):
        selected = set(form.genre.data)
        genre_choices = [(genre, genre.id in selected) for genre in genres]
        return render(
            "book_form.html",
            title=title,
            form=form,
            book=book,
            authors=authors,
            genre_choices=genre_choices,
            errors=errors,
        )

    def _delete_page(self, book, instances):
        return render("book_delete.html", title="Delete Book", book=book, book_instances=instances)

    # ----- list / detail -----
    def list(self):
        books = self.store.find(Book, fields=("title", "author_id"), order_by=[Book.title], populate=("author",))
        return render("book_list.html", title="Book List", books=books)

    def detail(self, entity_id):
        book = self.store.get(Book, entity_id, populate=("author", "genres"))
        instances = self._instances_of(entity_id)
        return render("book_detail.html", title=book.title, book=book, book_instances=instances)

    # ----- create -----
    def create_form(self):
        authors, genres = self._choices()
        return self._form_page("Create Book", BookForm(), None, authors, genres)

    def create(self):
        authors, genres = self._choices()
        form = self._bound_form(authors)
        valid = form.validate()
        book = self._candidate(form)
        if not valid:
            logger.debug("Book form rejected: %s", form.errors)
            return self._form_page("Create Book", form, book, authors, genres, collect_errors(form))
        book.genres = self.store.find_many(Genre, form.genre.data)
        self.store.insert(book)
        return self.redirect_to(book)

    # ----- delete -----
    def delete_form(self, entity_id):
        book = self.store.find_by_id(Book, entity_id, populate=("author", "genres"))
        if book is None:
            return self.redirect_to_list()
        return self._delete_page(book, self._instances_of(entity_id))

    def delete(self, entity_id):
        book = self.store.find_by_id(Book, entity_id, populate=("author", "genres"))
        if book is None:
            return self.redirect_to_list()
        instances = self._instances_of(entity_id)
        if instances:
            logger.info("Book %s still has %d cop(ies); not deleted", entity_id, len(instances))
            return self._delete_page(book, instances)
        self.store.delete(book)
        return self.redirect_to_list()

    # ----- update -----
    def update_form(self, entity_id):
        book = self.store.get(Book, entity_id, populate=("author", "genres"))
        authors, genres = self._choices()
        form = BookForm(
            data={
                "title": book.title,
                "author": book.author_id,
                "summary": book.summary,
                "isbn": book.isbn,
                "genre": [genre.id for genre in book.genres],
            }
        )
        return self._form_page("Update Book", form, book, authors, genres)

    def update(self, entity_id):
        authors, genres = self._choices()
        form = self._bound_form(authors)
        valid = form.validate()
        book = self._candidate(form, entity_id)
        if not valid:
            return self._form_page("Update Book", form, book, authors, genres, collect_errors(form))
        book.genres = self.store.find_many(Genre, form.genre.data)
        saved = self.store.update(book, relationships=("genres",))
        return self.redirect_to(saved)
