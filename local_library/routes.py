"""URL map of the catalog blueprint.

Every entity kind gets the same eight routes; the view functions are bound
methods of controllers constructed around the application's store.
"""

from flask import Blueprint

from .controllers import (
    AuthorController,
    BookController,
    BookInstanceController,
    CatalogController,
    GenreController,
)


def add_entity_routes(bp, kind, controller):
    bp.add_url_rule(f"/{kind}s", f"{kind}_list", controller.list, methods=["GET"])
    bp.add_url_rule(f"/{kind}/create", f"{kind}_create", controller.create_form, methods=["GET"])
    bp.add_url_rule(f"/{kind}/create", f"{kind}_create_post", controller.create, methods=["POST"])
    bp.add_url_rule(f"/{kind}/<entity_id>", f"{kind}_detail", controller.detail, methods=["GET"])
    bp.add_url_rule(f"/{kind}/<entity_id>/delete", f"{kind}_delete", controller.delete_form, methods=["GET"])
    bp.add_url_rule(f"/{kind}/<entity_id>/delete", f"{kind}_delete_post", controller.delete, methods=["POST"])
    bp.add_url_rule(f"/{kind}/<entity_id>/update", f"{kind}_update", controller.update_form, methods=["GET"])
    bp.add_url_rule(f"/{kind}/<entity_id>/update", f"{kind}_update_post", controller.update, methods=["POST"])


def create_catalog_blueprint(store):
    bp = Blueprint("catalog", __name__, url_prefix="/catalog")
    bp.add_url_rule("/", "index", CatalogController(store).index, methods=["GET"])
    add_entity_routes(bp, "book", BookController(store))
    add_entity_routes(bp, "author", AuthorController(store))
    add_entity_routes(bp, "genre", GenreController(store))
    add_entity_routes(bp, "bookinstance", BookInstanceController(store))
    return bp
