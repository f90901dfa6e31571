"""JSON boundary helpers shared by the API views."""

import json
import logging
from functools import wraps

from django.db import IntegrityError
from django.http import JsonResponse

from core.exceptions import BackOfficeError, ConfigurationError, InvalidPayload

logger = logging.getLogger(__name__)


def error_response(exc: BackOfficeError) -> JsonResponse:
    return JsonResponse(exc.as_dict(), status=exc.status)


def api_view(view):
    """Map engine errors to JSON responses.

    BackOfficeError -> its own status and code.
    IntegrityError -> 409 CONFLICT (e.g. a unique number raced).
    Anything else is logged with traceback and answered with a generic 500.
    """

    @wraps(view)
    def wrapped(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except ConfigurationError as exc:
            logger.error("Configuration error in %s %s: %s", request.method, request.path, exc)
            return error_response(exc)
        except BackOfficeError as exc:
            logger.info("Rejected %s %s: %s", request.method, request.path, exc.wire_code)
            return error_response(exc)
        except IntegrityError:
            logger.warning("Integrity conflict in %s %s", request.method, request.path, exc_info=True)
            return JsonResponse({"error": "CONFLICT", "message": "Conflicting data."}, status=409)
        except Exception:
            logger.exception("Unhandled error in %s %s", request.method, request.path)
            return JsonResponse({"error": "INTERNAL_ERROR", "message": "Internal error."}, status=500)

    return wrapped


def parse_json_body(request) -> dict:
    """Decode a JSON object body or raise InvalidPayload."""
    try:
        data = json.loads(request.body or b"{}")
    except (TypeError, ValueError):
        raise InvalidPayload(message="Body is not valid JSON.")
    if not isinstance(data, dict):
        raise InvalidPayload(message="Body must be a JSON object.")
    return data
