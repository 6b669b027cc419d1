import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from pymongo.errors import PyMongoError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.router import api_router
from app.config import Settings, get_settings
from app.database.mongo import MongoStore, store_from_settings
from app.services.product_service import StreamAborted

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO"):
    logging.basicConfig(level=level.upper(), format=LOG_FORMAT)


@asynccontextmanager
async def lifespan(app: FastAPI):
    store: MongoStore = app.state.store
    try:
        await store.connect()
    except Exception:
        # refuse to serve without a database
        logger.exception("Connection to MongoDB failed")
        raise
    try:
        yield
    finally:
        store.close()


def create_app(settings: Settings | None = None, store: MongoStore | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(title="Products Cursor API", lifespan=lifespan)
    app.state.settings = settings
    app.state.store = store or store_from_settings(settings)

    app.include_router(api_router)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            logger.warning(f"No route for {request.method} {request.url.path}")
            return JSONResponse({"error": "Not Found"}, status_code=404)
        return JSONResponse({"error": exc.detail}, status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception):
        # aborted streams were logged where they failed
        if not isinstance(exc, StreamAborted):
            logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse({"error": "Internal Server Error"}, status_code=500)

    @app.get("/")
    def root():
        return {"status": "running", "message": "Products Cursor API"}

    @app.get("/health")
    async def health_check(request: Request):
        try:
            await request.app.state.store.ping()
        except PyMongoError:
            logger.exception("Health check failed")
            return JSONResponse({"status": "unhealthy"}, status_code=503)
        return {"status": "healthy"}

    return app
