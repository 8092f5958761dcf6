from datetime import date

from ..forms import BookInstanceForm, collect_errors
from ..models import BOOK_INSTANCE_STATUSES, DEFAULT_STATUS, Book, BookInstance
from ..rendering import render
from .base import Controller


class BookInstanceController(Controller):
    list_endpoint = "catalog.bookinstance_list"

    def _books(self):
        return self.store.find(Book, fields=("title",), order_by=[Book.title])

    def _bound_form(self, books, **kwargs):
        form = BookInstanceForm(**kwargs)
        form.book_ids = {book.id for book in books}
        return form

    @staticmethod
    def _candidate(form, entity_id=None):
        """Unsaved BookInstance; blank status and due date fall back to their defaults."""
        return BookInstance(
            id=entity_id,
            book_id=form.book.data or None,
            imprint=form.imprint.data,
            status=form.status.data or DEFAULT_STATUS,
            due_back=form.due_back.data or date.today(),
        )

    def _form_page(self, title, form, bookinstance, books, errors=None):
        return render(
            "bookinstance_form.html",
            title=title,
            form=form,
            bookinstance=bookinstance,
            book_list=books,
            selected_book=form.book.data,
            statuses=BOOK_INSTANCE_STATUSES,
            errors=errors,
        )

    # ----- list / detail -----
    def list(self):
        instances = self.store.find(BookInstance, populate=("book",))
        return render("bookinstance_list.html", title="Book Instance List", bookinstances=instances)

    def detail(self, entity_id):
        instance = self.store.get(BookInstance, entity_id, populate=("book",))
        return render("bookinstance_detail.html", title="Book Status", bookinstance=instance)

    # ----- create -----
    def create_form(self):
        return self._form_page("Create BookInstance", BookInstanceForm(), None, self._books())

    def create(self):
        books = self._books()
        form = self._bound_form(books)
        valid = form.validate()
        instance = self._candidate(form)
        if not valid:
            return self._form_page("Create BookInstance", form, instance, books, collect_errors(form))
        self.store.insert(instance)
        return self.redirect_to(instance)

    # ----- delete -----
    def delete_form(self, entity_id):
        instance = self.store.find_by_id(BookInstance, entity_id, populate=("book",))
        if instance is None:
            return self.redirect_to_list()
        return render("bookinstance_delete.html", title="Delete BookInstance", bookinstance=instance)

    def delete(self, entity_id):
        instance = self.store.find_by_id(BookInstance, entity_id)
        if instance is None:
            return self.redirect_to_list()
        self.store.delete(instance)
        return self.redirect_to_list()

    # ----- update -----
    def update_form(self, entity_id):
        instance = self.store.get(BookInstance, entity_id, populate=("book",))
        books = self._books()
        form = BookInstanceForm(
            data={
                "book": instance.book_id,
                "imprint": instance.imprint,
                "status": instance.status,
                "due_back": instance.due_back,
            }
        )
        return self._form_page("Update BookInstance", form, instance, books)

    def update(self, entity_id):
        books = self._books()
        form = self._bound_form(books)
        valid = form.validate()
        instance = self._candidate(form, entity_id)
        if not valid:
            return self._form_page("Update BookInstance", form, instance, books, collect_errors(form))
        saved = self.store.update(instance)
        return self.redirect_to(saved)
