"""Template rendering with failures turned into a finished 500 response."""

from flask import render_template
from jinja2 import TemplateError

from .errors import TemplateRenderError
from .logs import get_logger

logger = get_logger("rendering")


def render(template_name, status=200, **context):
    try:
        body = render_template(template_name, **context)
    except TemplateError:
        logger.exception("Failed to render %s", template_name)
        raise TemplateRenderError(template_name)
    return body, status
