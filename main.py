from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pymongo.database import Database
import logging

from config import settings
from database.connection import close_db, connect_db, ensure_indexes
from errors import register_error_handlers

# =====================================================
# * Main routers
# =====================================================
from auth.routes import router as auth_router
from catalog.routes import router as tracks_router
from routes.contact_routes import router as contact_router

# =====================================================
# * Global logging setup
# =====================================================
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s - %(message)s"
)
logger = logging.getLogger("main")


def create_app(database: Optional[Database] = None) -> FastAPI:
    """Build the API.

    With ``database`` given the app uses that handle as is; otherwise it
    connects on startup and closes the client on shutdown.
    """

    # =====================================================
    # * Database lifecycle
    # =====================================================
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        client = None
        db = database
        if db is None:
            client, db = connect_db()
        ensure_indexes(db)
        app.state.db = db
        logger.info("✅ Database ready, application started.")
        try:
            yield
        finally:
            if client is not None:
                close_db(client)

    # debug stays off so unexpected errors always reach the generic 500 handler.
    app = FastAPI(
        title=f"{settings.PROJECT_NAME} API",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    # =====================================================
    # * CORS
    # =====================================================
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # =====================================================
    # * Request log
    # =====================================================
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    register_error_handlers(app)

    # =====================================================
    # * Routes
    # =====================================================
    app.include_router(auth_router, prefix="/api/auth", tags=["Auth"])
    app.include_router(tracks_router, prefix="/api/tracks", tags=["Tracks"])
    app.include_router(contact_router, prefix="/api/contact", tags=["Contact"])

    @app.get("/", summary="Backend root")
    def root():
        return {
            "message": f"🚀 {settings.PROJECT_NAME} backend running",
            "version": settings.VERSION,
            "env": settings.ENV,
        }

    return app


app = create_app()
logger.info(f"🌍 {settings.PROJECT_NAME} backend loaded in '{settings.ENV}' mode.")
