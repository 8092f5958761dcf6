"""Entity store: the only place the controllers touch the database.

``CatalogStore`` wraps a Flask-SQLAlchemy handle and is constructed once per
application by the factory, then handed to every controller. Lookups come in
two flavours so callers pick the absence policy explicitly:

* ``find_by_id`` returns ``None`` when nothing matches;
* ``get`` raises :class:`~local_library.errors.EntityNotFound` (a 404).
"""

from sqlalchemy import func, select
from sqlalchemy.orm import load_only, selectinload

from .errors import EntityNotFound
from .logs import get_logger
from .models import db as default_db

logger = get_logger("store")


class CatalogStore:
    def __init__(self, database=None):
        self.db = database if database is not None else default_db
        self.app = None

    # -----------------------
    # Lifecycle
    # -----------------------
    def init_app(self, app):
        self.db.init_app(app)
        self.app = app
        app.extensions["catalog_store"] = self
        if app.config.get("LIBRARY_CREATE_SCHEMA", True):
            with app.app_context():
                self.create_schema()

    def create_schema(self):
        self.db.create_all()

    def shutdown(self):
        """Release pooled connections; the app must not be used afterwards."""
        with self.app.app_context():
            self.db.session.remove()
            self.db.engine.dispose()
        logger.debug("Store connections released")

    @property
    def session(self):
        return self.db.session

    # -----------------------
    # Queries
    # -----------------------
    def _options(self, model, fields, populate):
        options = []
        if fields:
            options.append(load_only(*(getattr(model, name) for name in fields)))
        for name in populate:
            options.append(selectinload(getattr(model, name)))
        return options

    def find_by_id(self, model, entity_id, populate=()):
        if not entity_id:
            return None
        stmt = select(model).where(model.id == entity_id).options(*self._options(model, None, populate))
        return self.session.execute(stmt).scalars().first()

    def get(self, model, entity_id, populate=()):
        entity = self.find_by_id(model, entity_id, populate=populate)
        if entity is None:
            raise EntityNotFound(model.display_name, entity_id)
        return entity

    def find(self, model, *criteria, fields=None, order_by=(), populate=()):
        """All documents of ``model`` matching every criterion.

        ``fields`` limits the loaded columns (the id is always loaded) and
        ``populate`` names relationships to load alongside each document.
        """
        stmt = select(model).where(*criteria).options(*self._options(model, fields, populate))
        if order_by:
            stmt = stmt.order_by(*order_by)
        return list(self.session.execute(stmt).scalars().all())

    def find_one(self, model, *criteria):
        stmt = select(model).where(*criteria).limit(1)
        return self.session.execute(stmt).scalars().first()

    def find_many(self, model, ids):
        """Documents whose id is in ``ids``; unknown ids are skipped."""
        ids = list(ids)
        if not ids:
            return []
        return self.find(model, model.id.in_(ids))

    def count(self, model, *criteria):
        stmt = select(func.count()).select_from(model).where(*criteria)
        return self.session.execute(stmt).scalar_one()

    # -----------------------
    # Writes
    # -----------------------
    def insert(self, entity):
        self.session.add(entity)
        self.session.commit()
        logger.info("Created %s %s", type(entity).__name__, entity.id)
        return entity

    def update(self, entity, relationships=()):
        """Copy ``entity``'s columns onto the stored document with the same id.

        ``entity`` is an unsaved candidate carrying the original identifier.
        Returns the stored document after the commit.
        """
        model = type(entity)
        stored = self.get(model, entity.id)
        for column in model.__table__.columns:
            if column.primary_key:
                continue
            setattr(stored, column.key, getattr(entity, column.key))
        for name in relationships:
            setattr(stored, name, list(getattr(entity, name)))
        self.session.commit()
        logger.info("Updated %s %s", model.__name__, stored.id)
        return stored

    def delete(self, entity):
        entity_id = entity.id
        self.session.delete(entity)
        self.session.commit()
        logger.info("Deleted %s %s", type(entity).__name__, entity_id)
