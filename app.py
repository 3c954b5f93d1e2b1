from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

import config
from context import AppContext
from db import create_database
from errors import ApiError, DatabaseUnavailable
from log import configure_logging, get_logger
from routes import auth, customers, employees, public

logger = get_logger(__name__)

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Permitted-Cross-Domain-Policies": "none",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
}


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging()
    owned_db = None
    if getattr(app.state, "context", None) is None:
        owned_db = create_database()
        try:
            owned_db.connect()
        except DatabaseUnavailable:
            logger.critical("Cannot reach IBM i at %s, shutting down", config.DB_SYSTEM)
            raise
    try:
        if owned_db is not None:
            app.state.context = AppContext(db=owned_db)
        yield
    finally:
        if owned_db is not None:
            owned_db.close()


def install_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    def _handle_api_error(_request: Request, exc: ApiError) -> JSONResponse:
        return JSONResponse(status_code=exc.status_code, content={"error": exc.message})

    @app.exception_handler(Exception)
    def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})


def install_security_headers(app: FastAPI) -> None:
    @app.middleware("http")
    async def _security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


def create_app(context: AppContext | None = None) -> FastAPI:
    """Build the API.  Without a context the lifespan opens the real pool."""
    app = FastAPI(
        title="IBM i Data Explorer",
        lifespan=lifespan,
        dependencies=[Depends(auth.enforce_global_limit)],
    )
    if context is not None:
        app.state.context = context

    install_exception_handlers(app)
    install_security_headers(app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[config.FRONTEND_URL],
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Content-Type", auth.ADMIN_HEADER],
    )

    app.include_router(public.router)
    app.include_router(auth.router)
    app.include_router(employees.router)
    app.include_router(customers.router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    configure_logging()
    uvicorn.run(app, host="0.0.0.0", port=config.PORT)
