from .author import AuthorController
from .book import BookController
from .bookinstance import BookInstanceController
from .catalog import CatalogController
from .genre import GenreController

__all__ = [
    "AuthorController",
    "BookController",
    "BookInstanceController",
    "CatalogController",
    "GenreController",
]
