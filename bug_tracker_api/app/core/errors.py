"""
Error types raised by the service layer and their HTTP rendering.

Validation failures on identifiers are raised as subclasses of
``BadRequestAlertException``.  Each carries the affected entity name and
a short error key (``idexists``, ``idnull``, ``idinvalid``,
``idnotfound``) which the exception handler copies into the response
body and into the ``X-<app>-error`` header, so clients can show a
localized message.  Lookups that simply find nothing (``GET``/``DELETE``
by id) are answered with a plain ``HTTPException(404)`` by the
endpoints instead.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from .headers import create_failure_alert

logger = logging.getLogger(__name__)


class BadRequestAlertException(Exception):
    """A client error tied to one entity type, rendered as HTTP 400."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, title: str, entity_name: str, error_key: str) -> None:
        super().__init__(title)
        self.title = title
        self.entity_name = entity_name
        self.error_key = error_key


class IdentifierConflict(BadRequestAlertException):
    """A create request already carries an identifier."""

    def __init__(self, entity_name: str) -> None:
        super().__init__(f"A new {entity_name} cannot already have an ID", entity_name, "idexists")


class IdentifierMissing(BadRequestAlertException):
    """An update request carries no identifier in its body."""

    def __init__(self, entity_name: str) -> None:
        super().__init__("Invalid id", entity_name, "idnull")


class IdentifierMismatch(BadRequestAlertException):
    """The body identifier differs from the one in the path."""

    def __init__(self, entity_name: str) -> None:
        super().__init__("Invalid ID", entity_name, "idinvalid")


class EntityNotFound(BadRequestAlertException):
    """The addressed (or referenced) entity does not exist in storage."""

    def __init__(self, entity_name: str, entity_id: str | None = None) -> None:
        super().__init__("Entity not found", entity_name, "idnotfound")
        self.entity_id = entity_id


async def bad_request_alert_handler(request: Request, exc: BadRequestAlertException) -> JSONResponse:
    logger.warning(
        "Rejected %s %s: %s (%s.%s)",
        request.method,
        request.url.path,
        exc.title,
        exc.entity_name,
        exc.error_key,
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "title": exc.title,
            "entityName": exc.entity_name,
            "errorKey": exc.error_key,
            "status": exc.status_code,
        },
        headers=create_failure_alert(exc.entity_name, exc.error_key),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the handlers above to ``app``."""
    app.add_exception_handler(BadRequestAlertException, bad_request_alert_handler)
