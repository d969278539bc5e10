"""Entry point for the HostNote service."""

import time
import uuid

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware

from hostnote.config import HOSTNOTE_HOST, HOSTNOTE_PORT, MIN_SECRET_LENGTH, load_settings
from hostnote.dependencies import build_services
from hostnote.exceptions import (
    AuthenticationError,
    ConflictError,
    HostNoteException,
    InvalidInputError,
    NotFoundError,
    PayloadTooLargeError,
    UnauthorizedError,
)
from hostnote.logging_config import setup_logging
from hostnote.middleware import SECURITY_HEADERS, build_limiter, rate_limit_key
from hostnote.routes.file_routes import router as file_router
from hostnote.routes.public_routes import router as public_router
from hostnote.routes.user_routes import router as user_router

logger = setup_logging('hostnote')

app = FastAPI(
    title="HostNote",
    description="Multi-user encrypted text file store with public sharing",
    version="1.0.0"
)

# Registered before the http middlewares so it runs innermost
app.add_middleware(SlowAPIMiddleware)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Middleware to log all HTTP requests and responses.
    """
    request_id = str(uuid.uuid4())
    request.state.request_id = request_id

    start_time = time.time()

    logger.info(
        f"Request started: {request.method} {request.url.path} [request_id={request_id}]"
    )

    response = await call_next(request)

    duration = time.time() - start_time

    logger.info(
        f"Request completed: {request.method} {request.url.path} "
        f"status={response.status_code} duration={duration:.3f}s [request_id={request_id}]"
    )

    response.headers["X-Request-ID"] = request_id

    return response


@app.middleware("http")
async def security_headers(request: Request, call_next):
    response = await call_next(request)
    for header, value in SECURITY_HEADERS.items():
        response.headers[header] = value
    return response


@app.on_event("startup")
async def startup_event():
    """
    Load settings, wire the storage core and rebuild the public link registry.
    """
    logger.info("HostNote service starting up...")

    settings = load_settings()
    if len(settings.encryption_key) < MIN_SECRET_LENGTH:
        logger.warning(f"ENCRYPTION_KEY is shorter than {MIN_SECRET_LENGTH} characters")

    settings.data_dir.mkdir(parents=True, exist_ok=True)
    logger.info(f"Storage root: {settings.data_dir}")

    services = build_services(settings)
    services.rebuild_registry()

    app.state.services = services
    limiter = build_limiter(settings)
    limiter.exempt(health_check)
    limiter.exempt(ready_check)
    app.state.limiter = limiter


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("HostNote service shutting down...")


def _request_id(request: Request) -> str:
    return getattr(request.state, 'request_id', 'unknown')


@app.exception_handler(InvalidInputError)
async def invalid_input_handler(request: Request, exc: InvalidInputError):
    logger.warning(
        f"Invalid input error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc), "code": "INVALID_INPUT"}
    )


@app.exception_handler(PayloadTooLargeError)
async def payload_too_large_handler(request: Request, exc: PayloadTooLargeError):
    logger.warning(
        f"Payload too large error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        content={"detail": str(exc), "code": "PAYLOAD_TOO_LARGE"}
    )


@app.exception_handler(UnauthorizedError)
async def unauthorized_handler(request: Request, exc: UnauthorizedError):
    logger.warning(
        f"Unauthorized error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_401_UNAUTHORIZED,
        content={"detail": str(exc), "code": "UNAUTHORIZED"}
    )


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    logger.warning(
        f"Not found error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc), "code": "NOT_FOUND"}
    )


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    logger.warning(
        f"Conflict error: {exc} [request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_409_CONFLICT,
        content={"detail": str(exc), "code": "CONFLICT"}
    )


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    # Called synchronously from SlowAPIMiddleware
    logger.warning(
        f"Rate limit exceeded for client {rate_limit_key(request)} "
        f"[request_id={_request_id(request)}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        content={"detail": "Too many requests. Please try again later.", "code": "RATE_LIMITED"}
    )


app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)


@app.exception_handler(AuthenticationError)
async def authentication_error_handler(request: Request, exc: AuthenticationError):
    # Reported to clients exactly like a missing file
    user_id = getattr(request.state, 'user_id', 'anonymous')
    logger.error(
        f"Ciphertext authentication failure: {exc} [request_id={_request_id(request)}] "
        f"[user_id={user_id}] path={request.url.path}"
    )
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "File not found", "code": "NOT_FOUND"}
    )


@app.exception_handler(HostNoteException)
async def hostnote_exception_handler(request: Request, exc: HostNoteException):
    logger.error(
        f"HostNote exception: {exc} [request_id={_request_id(request)}] path={request.url.path}",
        exc_info=True
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error", "code": "INTERNAL_ERROR"}
    )


app.include_router(user_router)
app.include_router(file_router)
app.include_router(public_router)


@app.get("/health")
async def health_check():
    """
    Health check endpoint for Docker healthcheck.
    Returns 200 if service is alive.
    """
    return {"status": "healthy", "service": "hostnote"}


@app.get("/ready")
def ready_check(request: Request):
    """
    Readiness check endpoint.
    Verifies the storage root is writable and reports loaded public links.
    """
    services = getattr(request.app.state, 'services', None)
    if services is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"ready": False, "storage": "not initialized", "publicFiles": 0}
        )

    root = services.resolver.root
    probe = root / f".ready-{uuid.uuid4().hex}"
    try:
        probe.write_text("ok")
        probe.unlink()
        storage_status = "ok"
    except OSError as e:
        storage_status = f"error: {e.strerror or e}"

    ready = storage_status == "ok"
    status_code = status.HTTP_200_OK if ready else status.HTTP_503_SERVICE_UNAVAILABLE

    return JSONResponse(
        status_code=status_code,
        content={
            "ready": ready,
            "storage": storage_status,
            "publicFiles": services.registry.count()
        }
    )


def main() -> None:
    """
    Start the FastAPI server with uvicorn.
    """
    uvicorn.run(
        "hostnote.main:app",
        host=HOSTNOTE_HOST,
        port=HOSTNOTE_PORT,
    )


if __name__ == "__main__":
    main()
