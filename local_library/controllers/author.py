from ..forms import AuthorForm, collect_errors
from ..logs import get_logger
from ..models import Author, Book
from ..rendering import render
from .base import Controller

logger = get_logger("controllers.author")


class AuthorController(Controller):
    list_endpoint = "catalog.author_list"

    def _books_by(self, author_id):
        return self.store.find(
            Book, Book.author_id == author_id, fields=("title", "summary"), order_by=[Book.title]
        )

    @staticmethod
    def _candidate(form, entity_id=None):
        """Unsaved Author built from the sanitized form values."""
        return Author(
            id=entity_id,
            first_name=form.first_name.data,
            family_name=form.family_name.data,
            date_of_birth=form.date_of_birth.data,
            date_of_death=form.date_of_death.data,
        )

    def _form_page(self, title, form, author, errors=None):
        return render("author_form.html", title=title, form=form, author=author, errors=errors)

    def _delete_page(self, author, books):
        return render("author_delete.html", title="Delete Author", author=author, author_books=books)

    # ----- list / detail -----
    def list(self):
        authors = self.store.find(Author, order_by=[Author.family_name, Author.first_name])
        return render("author_list.html", title="Author List", authors=authors)

    def detail(self, entity_id):
        author = self.store.get(Author, entity_id)
        books = self._books_by(entity_id)
        return render("author_detail.html", title="Author Detail", author=author, author_books=books)

    # ----- create -----
    def create_form(self):
        return self._form_page("Create Author", AuthorForm(), None)

    def create(self):
        form = AuthorForm()
        valid = form.validate()
        author = self._candidate(form)
        if not valid:
            logger.debug("Author form rejected: %s", form.errors)
            return self._form_page("Create Author", form, author, collect_errors(form))
        self.store.insert(author)
        return self.redirect_to(author)

    # ----- delete -----
    def delete_form(self, entity_id):
        author = self.store.find_by_id(Author, entity_id)
        if author is None:
            return self.redirect_to_list()
        return self._delete_page(author, self._books_by(entity_id))

    def delete(self, entity_id):
        author = self.store.find_by_id(Author, entity_id)
        if author is None:
            return self.redirect_to_list()
        books = self._books_by(entity_id)
        if books:
            logger.info("Author %s still has %d book(s); not deleted", entity_id, len(books))
            return self._delete_page(author, books)
        self.store.delete(author)
        return self.redirect_to_list()

    # ----- update -----
    def update_form(self, entity_id):
        author = self.store.get(Author, entity_id)
        return self._form_page("Update Author", AuthorForm(obj=author), author)

    def update(self, entity_id):
        form = AuthorForm()
        valid = form.validate()
        author = self._candidate(form, entity_id)
        if not valid:
            return self._form_page("Update Author", form, author, collect_errors(form))
        saved = self.store.update(author)
        return self.redirect_to(saved)
