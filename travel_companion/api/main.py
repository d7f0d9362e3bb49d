"""FastAPI application."""

from __future__ import annotations

import logging

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.middleware.base import BaseHTTPMiddleware

from travel_companion import __version__
from travel_companion.api.dependencies import get_ctx
from travel_companion.api.routes import collaborators_router, itinerary_router, trips_router
from travel_companion.api.schemas import HealthResponse
from travel_companion.application.context import AppContext
from travel_companion.config.settings import resolve_settings
from travel_companion.domain.exceptions import Forbidden, InvariantViolation, NotFound, ValidationError

_api_logger = logging.getLogger("travel-companion.api")

load_dotenv()  # pick up .env before settings are read

_settings = resolve_settings()

app = FastAPI(
    title="travel-companion",
    version=__version__,
    docs_url="/docs" if _settings.enable_docs else None,
    redoc_url=None,
)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject security response headers."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        response.headers["Cache-Control"] = "no-store"
        return response


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(ValidationError)
@app.exception_handler(InvariantViolation)
async def _bad_request(request: Request, exc: ValidationError | InvariantViolation) -> JSONResponse:
    return JSONResponse(status_code=400, content={"message": exc.message or "Invalid request"})


@app.exception_handler(RequestValidationError)
async def _invalid_shape(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    first = errors[0] if errors else {}
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    return JSONResponse(
        status_code=400,
        content={"message": f"{location}: {message}" if location else message},
    )


@app.exception_handler(NotFound)
async def _not_found(request: Request, exc: NotFound) -> Response:
    return Response(status_code=404)


@app.exception_handler(Forbidden)
async def _forbidden(request: Request, exc: Forbidden) -> Response:
    return Response(status_code=403)


@app.exception_handler(Exception)
async def _unexpected(request: Request, exc: Exception) -> JSONResponse:
    _api_logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.get("/health", response_model=HealthResponse)
def health(ctx: AppContext = Depends(get_ctx)) -> HealthResponse:
    return HealthResponse(status="ok", version=__version__, persistence=ctx.trip_repo.backend)


app.include_router(trips_router)
app.include_router(itinerary_router)
app.include_router(collaborators_router)
