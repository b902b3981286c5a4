"""
Initialize the movie catalog database with the reference movies.

- Waits for the database to accept connections
- Creates tables if missing
- Inserts movies with their genres and cast
- Runs exactly once (idempotent) unless --reset is given

Usage (from backend/):
    python -m catalog.scripts.initialize_db [--reset]
"""

import sys
import time
from typing import Dict, List, Optional

from loguru import logger
from sqlalchemy import delete, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session

from catalog.config import Settings, configure_logging
from catalog.database import Base, build_engine, build_session_factory
from catalog.models import CastMember, Genre, Movie, movie_genres
from catalog.seed_data import SEED_MOVIES


# CONFIG
MAX_DB_WAIT_SECONDS = 180
DB_RETRY_INTERVAL = 2


def wait_for_db(engine: Engine, max_wait: float = MAX_DB_WAIT_SECONDS) -> None:
    """Block until the database is accepting connections."""
    logger.info("[Seed] Waiting for the database to be ready...")

    deadline = time.time() + max_wait

    while True:
        try:
            with engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            logger.info("[Seed] Database is ready.")
            return
        except OperationalError:
            if time.time() >= deadline:
                raise RuntimeError("Database did not become ready in time")
            logger.info("[Seed] Database not ready yet. Retrying...")
            time.sleep(DB_RETRY_INTERVAL)


def database_already_initialized(db: Session) -> bool:
    """Authoritative idempotency check."""
    return db.execute(select(Movie.id).limit(1)).first() is not None


def clear_catalog(db: Session) -> None:
    db.execute(delete(CastMember))
    db.execute(delete(movie_genres))
    db.execute(delete(Movie))
    db.execute(delete(Genre))
    db.commit()
    db.expunge_all()


def get_or_create_genre(db: Session, name: str, cache: Dict[str, Genre]) -> Genre:
    genre = cache.get(name)
    if genre is None:
        genre = db.execute(select(Genre).where(Genre.name == name)).scalar_one_or_none()
        if genre is None:
            genre = Genre(name=name)
            db.add(genre)
        cache[name] = genre
    return genre


def seed_movies(db: Session, movies: Optional[List[dict]] = None, reset: bool = False) -> int:
    """Insert ``movies`` (default: SEED_MOVIES) and return how many were added."""
    movies = SEED_MOVIES if movies is None else movies

    if reset:
        logger.info("[Seed] Clearing existing data...")
        clear_catalog(db)
    elif database_already_initialized(db):
        logger.info("[Seed] Database already initialized. Skipping seed.")
        return 0

    genres: Dict[str, Genre] = {}

    for data in movies:
        movie = Movie(
            id=data.get("id"),
            title=data["title"].strip(),
            year=int(data["year"]),
            description=data.get("description") or "",
            rating=float(data["rating"]),
            director=data["director"],
            runtime=int(data["runtime"]),
            release_date=data["releaseDate"],
            poster=data.get("poster") or "",
        )
        movie.genres = [get_or_create_genre(db, name, genres) for name in data.get("genre", [])]
        movie.cast = [CastMember(actor_name=name) for name in data.get("cast", [])]
        db.add(movie)
        logger.debug(f"[Seed] Queued movie: {movie.title}")

    db.commit()
    logger.info(f"[Seed] Inserted {len(movies)} movies with genres and cast")
    return len(movies)


def main(argv: Optional[List[str]] = None) -> None:
    argv = sys.argv[1:] if argv is None else argv
    settings = Settings()
    configure_logging(settings.log_level)

    engine = build_engine(settings.database_url)
    try:
        wait_for_db(engine)

        # Ensure tables exist BEFORE querying them
        Base.metadata.create_all(bind=engine)

        SessionLocal = build_session_factory(engine)
        with SessionLocal() as db:
            seed_movies(db, reset="--reset" in argv)
    finally:
        engine.dispose()


if __name__ == "__main__":
    main()
