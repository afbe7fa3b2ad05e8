"""JSON endpoints exposing the launcher commands to the desktop shell."""

import json
import logging
from collections.abc import Callable
from functools import wraps
from typing import Any

from django.http import HttpRequest
from django.http import HttpResponse
from django.http import JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET
from django.views.decorators.http import require_http_methods
from django.views.decorators.http import require_POST

from launcher.apps import get_commands
from launcher.errors import BangNotFoundError
from launcher.errors import BrowserError
from launcher.errors import CannotDeleteBuiltinError
from launcher.errors import FetchError
from launcher.errors import InvalidBangError
from launcher.errors import ParseError
from launcher.errors import StorageError
from launcher.errors import ZephyrError

logger = logging.getLogger(__name__)

ERROR_STATUS: list[tuple[type[ZephyrError], int]] = [
    (BangNotFoundError, 404),
    (CannotDeleteBuiltinError, 400),
    (InvalidBangError, 400),
    (FetchError, 502),
    (ParseError, 502),
    (BrowserError, 500),
    (StorageError, 500),
]


class BadRequest(Exception):
    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.status = status


def _error(message: str, status: int) -> JsonResponse:
    return JsonResponse({"error": message}, status=status)


def json_command(
    view: Callable[..., Any],
) -> Callable[..., HttpResponse]:
    """Serialize a view's return value and map launcher errors to statuses."""

    @wraps(view)
    def wrapper(request: HttpRequest, *args: Any, **kwargs: Any) -> HttpResponse:
        try:
            result = view(request, *args, **kwargs)
        except BadRequest as exc:
            return _error(str(exc), exc.status)
        except ZephyrError as exc:
            status = next(
                (code for cls, code in ERROR_STATUS if isinstance(exc, cls)),
                500,
            )
            logger.warning("Command %s failed: %s", view.__name__, exc)
            return _error(str(exc), status)
        if isinstance(result, HttpResponse):
            return result
        return JsonResponse(result, safe=False)

    return wrapper


def _json_body(request: HttpRequest) -> dict[str, Any]:
    if request.content_type != "application/json":
        msg = "Request body must be application/json."
        raise BadRequest(msg, status=415)
    try:
        data = json.loads(request.body or b"{}")
    except ValueError as exc:
        msg = f"Invalid JSON body: {exc}"
        raise BadRequest(msg) from exc
    if not isinstance(data, dict):
        msg = "JSON body must be an object."
        raise BadRequest(msg)
    return data


@require_GET
@json_command
def resolve(request: HttpRequest) -> dict[str, str]:
    """Return the URL a query resolves to without opening it."""
    return {"url": get_commands().resolve(request.GET.get("q", ""))}


@require_GET
@json_command
def search(request: HttpRequest) -> dict[str, str]:
    query = request.GET.get("q", "")
    if not query.strip():
        msg = "Query parameter 'q' is required."
        raise BadRequest(msg)
    return {"url": get_commands().search(query)}


@require_GET
@json_command
def suggestions(request: HttpRequest) -> list[str]:
    return get_commands().get_search_suggestions(request.GET.get("q", ""))


@csrf_exempt
@require_http_methods(["GET", "POST"])
@json_command
def bangs(request: HttpRequest) -> Any:
    commands = get_commands()
    if request.method == "POST":
        bang = commands.add_custom_bang(_json_body(request))
        return JsonResponse(bang.to_dict(), status=201)
    return [
        {"id": trigger, "name": name}
        for trigger, name in commands.get_available_bangs()
    ]


@csrf_exempt
@require_http_methods(["DELETE"])
@json_command
def bang_detail(request: HttpRequest, trigger: str) -> HttpResponse:  # noqa: ARG001
    get_commands().delete_custom_bang(trigger)
    return HttpResponse(status=204)


@csrf_exempt
@require_POST
@json_command
def refresh_bangs(request: HttpRequest) -> dict[str, int]:  # noqa: ARG001
    return {"count": get_commands().refresh_bangs()}


@csrf_exempt
@require_POST
@json_command
def clear_bangs_cache(request: HttpRequest) -> dict[str, int]:  # noqa: ARG001
    return {"count": get_commands().clear_bangs_cache()}


@csrf_exempt
@require_POST
@json_command
def open_url(request: HttpRequest) -> dict[str, str]:
    url = _json_body(request).get("url")
    if not isinstance(url, str) or not url.strip():
        msg = "Field 'url' is required."
        raise BadRequest(msg)
    get_commands().open_url(url.strip())
    return {"url": url.strip()}
