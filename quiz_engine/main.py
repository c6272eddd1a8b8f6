import logging
import uuid
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from quiz_engine.api import routes
from quiz_engine.utils.errors import (
    ErrorCode,
    QuizEngineError,
    build_error_payload,
    error_code_for_http_status,
)
from quiz_engine.utils.logging_setup import setup_file_logging, silence_noisy_loggers
from quiz_engine.utils.observability import get_request_id_from_headers
from quiz_engine.utils.settings import get_settings

logger = logging.getLogger(__name__)


def _request_id(request: Request):
    return getattr(
        getattr(request, "state", None), "request_id", None
    ) or get_request_id_from_headers(request.headers)


def _validate_cors(settings) -> None:
    env = str(getattr(settings, "app_env", "dev") or "dev").strip().lower()
    origins = getattr(settings, "allow_origins", None) or []
    if not isinstance(origins, list):
        origins = [str(origins)]
    origins_norm = [str(o or "").strip() for o in origins if str(o or "").strip()]
    if env in {"prod", "production"}:
        if not origins_norm or any(o == "*" for o in origins_norm):
            raise RuntimeError(
                "CORS is not explicitly configured for production. "
                "Set ALLOW_ORIGINS to an explicit allowlist (no '*')."
            )


def create_app() -> FastAPI:
    settings = get_settings()
    _validate_cors(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # noqa: ARG001
        if getattr(settings, "log_to_file", False):
            level = getattr(logging, str(settings.log_level).upper(), logging.INFO)
            silence_noisy_loggers()
            setup_file_logging(log_file_path=str(settings.log_file_path), level=level)
        yield

    app = FastAPI(title="Quiz Engine", version="1.0.0", lifespan=lifespan)

    @app.middleware("http")
    async def _request_id_middleware(request: Request, call_next):
        request_id = _request_id(request) or f"req_{uuid.uuid4().hex[:12]}"
        request.state.request_id = str(request_id)
        response = await call_next(request)
        response.headers["X-Request-Id"] = str(request_id)
        return response

    @app.exception_handler(HTTPException)
    async def _http_exception_handler(request: Request, exc: HTTPException):
        code = error_code_for_http_status(int(exc.status_code))
        detail = exc.detail
        if isinstance(detail, dict):
            message = str(detail.get("error") or detail.get("message") or detail)
            details = detail
        else:
            message = str(detail)
            details = None
        # FastAPI's `detail` stays alongside the canonical payload.
        payload = {"detail": detail}
        payload.update(
            build_error_payload(
                code=code,
                message=message,
                details=details,
                request_id=_request_id(request),
            )
        )
        return JSONResponse(status_code=int(exc.status_code), content=payload)

    @app.exception_handler(RequestValidationError)
    async def _validation_exception_handler(
        request: Request, exc: RequestValidationError
    ):
        errors = exc.errors()
        payload = {"detail": errors}
        payload.update(
            build_error_payload(
                code=ErrorCode.VALIDATION_ERROR,
                message="Validation error",
                details={"errors": errors},
                request_id=_request_id(request),
            )
        )
        return JSONResponse(status_code=422, content=payload)

    @app.exception_handler(QuizEngineError)
    async def _quiz_engine_exception_handler(request: Request, exc: QuizEngineError):
        payload = build_error_payload(
            code=ErrorCode.INVALID_REQUEST,
            message=str(exc),
            request_id=_request_id(request),
        )
        return JSONResponse(status_code=400, content=payload)

    @app.exception_handler(Exception)
    async def _unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("Unhandled exception: %s", exc, exc_info=True)
        payload = build_error_payload(
            code=ErrorCode.SERVICE_ERROR,
            message="Internal server error",
            request_id=_request_id(request),
        )
        return JSONResponse(status_code=500, content=payload)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(routes.router, prefix="/api/v1")
    return app


app = create_app()
