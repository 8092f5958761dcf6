from flask import redirect, url_for


class Controller:
    """Holds the store every operation of an entity controller queries."""

    # endpoint of the list view, e.g. "catalog.genre_list"
    list_endpoint = None

    def __init__(self, store):
        self.store = store

    def redirect_to_list(self):
        return redirect(url_for(self.list_endpoint))

    @staticmethod
    def redirect_to(entity):
        return redirect(entity.url)
