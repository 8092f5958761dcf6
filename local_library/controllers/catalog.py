from ..models import Author, Book, BookInstance, Genre
from ..rendering import render


class CatalogController:
    def __init__(self, store):
        self.store = store

    def index(self):
        counts = {
            "book_count": self.store.count(Book),
            "book_instance_count": self.store.count(BookInstance),
            "book_instance_available_count": self.store.count(BookInstance, BookInstance.status == "Available"),
            "author_count": self.store.count(Author),
            "genre_count": self.store.count(Genre),
        }
        return render("index.html", title="Local Library Home", **counts)
