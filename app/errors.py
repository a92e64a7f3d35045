import logging
from flask import Blueprint
from werkzeug.exceptions import HTTPException
from app.exceptions import BookstoreError, PersistenceFailure
from app.metrics import record_domain_error
from app.utils.responses import error, internal_error_response

errors_bp = Blueprint("errors_bp", __name__)
logger = logging.getLogger(__name__)


@errors_bp.app_errorhandler(BookstoreError)
def handle_domain_error(e):
    record_domain_error(e.code)
    if isinstance(e, PersistenceFailure):
        logger.error("Persistence failure: %s", e, exc_info=e.__cause__ is not None)
    else:
        logger.info({"event": "request_rejected", "code": e.code, "reason": e.message})
    return error(e.message, status=e.status, code=e.code)


@errors_bp.app_errorhandler(HTTPException)
def handle_http_exception(e):
    msg = e.description or getattr(e, "name", "HTTP Error")
    return error(msg, status=e.code, code=e.code)


@errors_bp.app_errorhandler(Exception)
def handle_unexpected_exception(e):
    logging.exception("Unhandled exception")
    return internal_error_response()
