"""Route decorators for error handling and request logging.

This module maps the exception taxonomy to JSON error responses so route
handlers only deal with the success path.
"""
import functools
import logging
from typing import Callable

from flask import request

from topvan_server.exception.CategorizationUnavailable import CategorizationUnavailable
from topvan_server.exception.NotFoundError import NotFoundError
from topvan_server.exception.PartialReconciliationFailure import PartialReconciliationFailure
from topvan_server.exception.StoreUnavailable import StoreUnavailable
from topvan_server.exception.ValidationError import ValidationError
from topvan_server.utils.helpers import respond_error

logger = logging.getLogger(__name__)


def handle_errors(func: Callable) -> Callable:
    """Decorator to handle common exceptions in route handlers.

    Catches:
    - ValidationError -> 400 (field errors in `errors`)
    - NotFoundError -> 404
    - PartialReconciliationFailure -> 500 with completed/failed steps
    - StoreUnavailable, CategorizationUnavailable -> 503
    - ValueError -> 400
    - Other exceptions -> 500

    Usage:
        @bp.route('/example')
        @handle_errors
        def example_route():
            ...
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except ValidationError as e:
            logger.warning("Validation error: %s", e)
            return respond_error(e.errors, status=400)
        except NotFoundError as e:
            logger.warning("Not found: %s", e)
            return respond_error(str(e), status=404)
        except PartialReconciliationFailure as e:
            logger.error("Partial reconciliation: %s", e)
            return respond_error(
                str(e), status=500,
                completed=e.completed,
                failed={name: str(err) for name, err in e.failed.items()},
                report=e.report,
            )
        except StoreUnavailable as e:
            logger.error("Store unavailable: %s", e)
            return respond_error('Document store unavailable', status=503)
        except CategorizationUnavailable as e:
            logger.warning("Categorization unavailable: %s", e)
            return respond_error(str(e), status=503)
        except ValueError as e:
            logger.warning("Bad request: %s", e)
            return respond_error(str(e), status=400)
        except Exception:
            logger.exception("Unexpected error in %s", func.__name__)
            return respond_error('Server error', status=500)
    return wrapper


def log_request(func: Callable) -> Callable:
    """Decorator to log request details."""
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        logger.info("%s %s called", request.method, request.path)
        return func(*args, **kwargs)
    return wrapper


def api_route(func: Callable) -> Callable:
    """Composite decorator: handle_errors + log_request."""
    return handle_errors(log_request(func))
