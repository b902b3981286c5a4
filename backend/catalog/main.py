from contextlib import asynccontextmanager
from typing import Optional

from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from . import movie_service, schemas
from .config import Settings, configure_logging
from .database import Base, build_engine, build_session_factory, get_db
from .errors import InvalidFilterError, StorageUnavailableError
from .routers import genre_routes, movie_routes


def create_app(settings: Optional[Settings] = None, engine: Optional[Engine] = None) -> FastAPI:
    """
    Build the API. The engine is created at startup and disposed at
    shutdown unless the caller passes one in, in which case the caller
    owns it.
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        configure_logging(settings.log_level)
        owned = engine is None
        db_engine = build_engine(settings.database_url) if owned else engine

        if settings.create_tables:
            Base.metadata.create_all(bind=db_engine)

        app.state.engine = db_engine
        app.state.session_factory = build_session_factory(db_engine)
        logger.info("[API] Startup complete, catalog database ready")
        try:
            yield
        finally:
            if owned:
                db_engine.dispose()
            logger.info("[API] Shutdown complete")

    app = FastAPI(title="Movie Catalog", lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=False,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    @app.exception_handler(InvalidFilterError)
    async def invalid_filter_handler(request: Request, exc: InvalidFilterError):
        logger.info(f"[API] Rejected {request.url.path}: {exc}")
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)})

    @app.exception_handler(StorageUnavailableError)
    async def storage_unavailable_handler(request: Request, exc: StorageUnavailableError):
        return JSONResponse(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, content={"detail": str(exc)})

    @app.get("/health", response_model=schemas.HealthOut)
    def health(db: Session = Depends(get_db)):
        ok = movie_service.check_database(db)
        return schemas.HealthOut(status="ok" if ok else "degraded", database=ok)

    app.include_router(movie_routes.router)
    app.include_router(genre_routes.router)
    return app


app = create_app()
