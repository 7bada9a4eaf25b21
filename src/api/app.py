from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException
from .error import ClientError, ServerError, error_body
from .middleware import metrics_middleware, rate_limit_middleware
from src.adapter.services.rate_limiter import ClientRateLimiter
from src.app.errors import InfrastructureError
from src.app.services.metrics import RequestMetrics
import logging

logger = logging.getLogger(__name__)


async def handle_client_error(request: Request, exc: ClientError):
    logger.warning(f"Client error: {exc.base_error.code} {request.method} {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.base_error.code, exc.base_error.message, exc.base_error.details),
        headers=exc.headers,
    )


async def handle_server_error(request: Request, exc: ServerError):
    logger.error(f"Server error: {exc.base_error.code}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(exc.base_error.code, "Internal server error"),
    )


_HTTP_ERROR_CODES = {
    status.HTTP_404_NOT_FOUND: "NOT_FOUND",
    status.HTTP_405_METHOD_NOT_ALLOWED: "METHOD_NOT_ALLOWED",
}


async def handle_http_error(request: Request, exc: StarletteHTTPException):
    code = _HTTP_ERROR_CODES.get(exc.status_code, "HTTP_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, str(exc.detail)),
        headers=getattr(exc, "headers", None),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError):
    details = {}
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"] if part not in ("body", "query", "header"))
        details[field or "request"] = err["msg"]
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_CONTENT,
        content=error_body("FAILED_VALIDATION", "Request failed validation", details),
    )


async def handle_infrastructure_error(request: Request, exc: InfrastructureError):
    logger.error(f"Infrastructure failure on {request.method} {request.url.path}: {exc!r}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            exc.code, "The server encountered a problem and could not process your request"
        ),
    )


async def handle_unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(
            "INTERNAL_SERVER_ERROR",
            "The server encountered a problem and could not process your request",
        ),
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.rate_limiter.start_sweeper()
    yield
    await app.state.rate_limiter.stop_sweeper()


def create_app(ApplicationConfig) -> FastAPI:
    from src.depends import get_current_user

    # Every request is authenticated; routes add their own authorization policy
    app = FastAPI(
        title="Greenlight API",
        version=ApplicationConfig.VERSION,
        lifespan=lifespan,
        dependencies=[Depends(get_current_user)],
    )

    app.state.config = ApplicationConfig
    app.state.metrics = RequestMetrics()
    app.state.rate_limiter = ClientRateLimiter(
        rps=ApplicationConfig.LIMITER_RPS,
        burst=ApplicationConfig.LIMITER_BURST,
        enabled=ApplicationConfig.LIMITER_ENABLED,
        idle_timeout=ApplicationConfig.LIMITER_IDLE_TIMEOUT,
        sweep_interval=ApplicationConfig.LIMITER_SWEEP_INTERVAL,
    )

    # Last registered runs first: CORS -> metrics -> rate limit -> routes
    app.middleware("http")(rate_limit_middleware)
    app.middleware("http")(metrics_middleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=ApplicationConfig.CORS_ORIGINS,
        allow_credentials=ApplicationConfig.CORS_ALLOW_CREDENTIALS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    from src.api.routes import healthcheck, metrics, movies, tokens, users

    app.include_router(healthcheck.router, tags=["Health"])
    app.include_router(movies.router, tags=["Movies"])
    app.include_router(users.router, tags=["Users"])
    app.include_router(tokens.router, tags=["Tokens"])
    app.include_router(metrics.router, tags=["Metrics"])

    app.add_exception_handler(ClientError, handle_client_error)
    app.add_exception_handler(ServerError, handle_server_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_error)
    app.add_exception_handler(RequestValidationError, handle_validation_error)
    app.add_exception_handler(InfrastructureError, handle_infrastructure_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    return app
