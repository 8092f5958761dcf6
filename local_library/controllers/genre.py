from ..forms import FieldError, GenreForm, collect_errors
from ..logs import get_logger
from ..models import Book, Genre
from ..rendering import render
from .base import Controller

logger = get_logger("controllers.genre")


class GenreController(Controller):
    list_endpoint = "catalog.genre_list"

    def _books_in(self, genre_id):
        return self.store.find(
            Book, Book.genres.any(Genre.id == genre_id), fields=("title", "summary"), order_by=[Book.title]
        )

    def _form_page(self, title, form, genre, errors=None):
        return render("genre_form.html", title=title, form=form, genre=genre, errors=errors)

    def _delete_page(self, genre, books):
        return render("genre_delete.html", title="Delete Genre", genre=genre, genre_books=books)

    # ----- list / detail -----
    def list(self):
        genres = self.store.find(Genre, order_by=[Genre.name])
        return render("genre_list.html", title="Genre List", genres=genres)

    def detail(self, entity_id):
        genre = self.store.get(Genre, entity_id)
        books = self._books_in(entity_id)
        return render("genre_detail.html", title="Genre Detail", genre=genre, genre_books=books)

    # ----- create -----
    def create_form(self):
        return self._form_page("Create Genre", GenreForm(), None)

    def create(self):
        form = GenreForm()
        valid = form.validate()
        genre = Genre(name=form.name.data)
        if not valid:
            logger.debug("Genre form rejected: %s", form.errors)
            return self._form_page("Create Genre", form, genre, collect_errors(form))

        existing = self.store.find_one(Genre, Genre.name_key == genre.name_key)
        if existing is not None:
            logger.info("Genre %r already exists as %s", genre.name, existing.id)
            return self.redirect_to(existing)
        self.store.insert(genre)
        return self.redirect_to(genre)

    # ----- delete -----
    def delete_form(self, entity_id):
        genre = self.store.find_by_id(Genre, entity_id)
        if genre is None:
            return self.redirect_to_list()
        return self._delete_page(genre, self._books_in(entity_id))

    def delete(self, entity_id):
        genre = self.store.find_by_id(Genre, entity_id)
        if genre is None:
            return self.redirect_to_list()
        books = self._books_in(entity_id)
        if books:
            logger.info("Genre %s still has %d book(s); not deleted", entity_id, len(books))
            return self._delete_page(genre, books)
        self.store.delete(genre)
        return self.redirect_to_list()

    # ----- update -----
    def update_form(self, entity_id):
        genre = self.store.get(Genre, entity_id)
        return self._form_page("Update Genre", GenreForm(obj=genre), genre)

    def update(self, entity_id):
        form = GenreForm()
        valid = form.validate()
        genre = Genre(id=entity_id, name=form.name.data)
        if not valid:
            return self._form_page("Update Genre", form, genre, collect_errors(form))

        clash = self.store.find_one(Genre, Genre.name_key == genre.name_key, Genre.id != entity_id)
        if clash is not None:
            errors = [FieldError("name", "Another genre already has this name")]
            return self._form_page("Update Genre", form, genre, errors)
        saved = self.store.update(genre)
        return self.redirect_to(saved)
