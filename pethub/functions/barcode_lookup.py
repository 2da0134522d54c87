"""
Barcode lookup function.

A small standalone app deployed next to the main API:

    uvicorn pethub.functions.barcode_lookup:app

POST {"barcode": "012345678905"} with a session bearer token. Responds 200 with
{"found": true, "product": {...}} or {"found": false, "barcode": ...}; 400 for a
bad body, 401 without a valid token, 429 past 60 lookups per user per minute,
500 when the server has no JWT secret.
"""

import json
import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, Response

from .. import config
from ..auth import AuthConfigurationError, InvalidTokenError, extract_bearer_token, verify_access_token
from ..domain.inventory.barcode import validate_barcode
from ..domain.inventory.lookup_service import lookup_product
from ..rate_limiter import check_rate_limit

logger = logging.getLogger(__name__)

RATE_LIMIT_WINDOW_SECONDS = 60
ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "authorization, x-client-info, apikey, content-type"

app = FastAPI(title="PetHub Barcode Lookup", version="1.0.0", docs_url=None, redoc_url=None)


def _is_local_origin(origin: str) -> bool:
    return origin.startswith("http://localhost:") or origin.startswith("http://127.0.0.1:")


def get_cors_origin(origin: str) -> str:
    """
    Credentialed requests need a specific origin rather than "*": reflect local dev
    origins, then allow-listed ones, then fall back to the first allowed origin.
    """
    if origin and _is_local_origin(origin):
        return origin
    if config.ALLOWED_ORIGINS:
        if origin in config.ALLOWED_ORIGINS:
            return origin
        return config.ALLOWED_ORIGINS[0]
    return origin or "*"


def cors_headers(request: Request) -> dict[str, str]:
    return {
        "Access-Control-Allow-Origin": get_cors_origin(request.headers.get("origin", "")),
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def preflight_cors_headers(origin: str) -> dict[str, str]:
    """Preflight headers reflect the request origin, or "*" when there is none"""
    return {
        "Access-Control-Allow-Origin": origin or "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def error_response(request: Request, status_code: int, content: dict, headers: dict = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=content,
        headers={**(headers or {}), **cors_headers(request)},
    )


@app.options("/")
async def barcode_lookup_preflight(request: Request):
    return Response(content="", status_code=200, headers=preflight_cors_headers(request.headers.get("origin", "")))


@app.api_route("/", methods=["GET", "PUT", "PATCH", "DELETE"])
async def barcode_lookup_method_not_allowed(request: Request):
    return error_response(request, 405, {"error": "Method not allowed"})


@app.post("/")
async def barcode_lookup(request: Request):
    token = extract_bearer_token(request.headers.get("authorization"))
    if not token:
        return error_response(request, 401, {"error": "Unauthorized"})

    try:
        user = verify_access_token(token)
    except AuthConfigurationError:
        return error_response(request, 500, {"error": "Server configuration error"})
    except InvalidTokenError:
        return error_response(request, 401, {"error": "Unauthorized"})

    is_allowed, _, _ = check_rate_limit(
        f"barcode_lookup:{user.user_id}",
        limit=config.BARCODE_RATE_LIMIT_PER_MINUTE,
        window_seconds=RATE_LIMIT_WINDOW_SECONDS,
    )
    if not is_allowed:
        return error_response(
            request,
            429,
            {"error": "too_many_requests", "message": "Too many lookups. Try again in a minute."},
            headers={"Retry-After": str(RATE_LIMIT_WINDOW_SECONDS)},
        )

    raw_body = await request.body()
    try:
        text = raw_body.decode("utf-8")
        body = json.loads(text) if text.strip() else {}
    except (UnicodeDecodeError, json.JSONDecodeError):
        return error_response(
            request, 400, {"error": 'Invalid JSON body. Send { "barcode": "012345678905" }'}
        )

    barcode_raw = body.get("barcode") if isinstance(body, dict) else None
    if not isinstance(barcode_raw, str):
        barcode_raw = ""

    validation = validate_barcode(barcode_raw)
    if not validation:
        return error_response(request, 400, {"error": validation.error})

    barcode = barcode_raw.strip()
    product = await lookup_product(barcode, api_key=config.BARCODE_LOOKUP_API_KEY)

    if not product:
        return JSONResponse(content={"found": False, "barcode": barcode}, headers=cors_headers(request))

    return JSONResponse(
        content={"found": True, "product": product.model_dump(exclude_none=True)},
        headers=cors_headers(request),
    )
