"""Error types raised by the store and the rendering helper."""

from werkzeug.exceptions import InternalServerError, NotFound


class EntityNotFound(NotFound):
    """No document of ``kind`` has identifier ``entity_id``."""

    def __init__(self, kind, entity_id):
        self.kind = kind
        self.entity_id = entity_id
        super().__init__(description=f"{kind} not found")


class TemplateRenderError(InternalServerError):
    """A template could not be rendered; the caller gets a 500 page."""

    def __init__(self, template_name):
        self.template_name = template_name
        super().__init__(description="The page could not be rendered.")
