import pytest
from sqlalchemy import delete, func, insert, select
from sqlalchemy.exc import IntegrityError

from catalog.database import build_engine
from catalog.models import CastMember, Genre, Movie, movie_genres
from catalog.scripts.initialize_db import (
    database_already_initialized,
    seed_movies,
    wait_for_db,
)


def count(db, table):
    return db.execute(select(func.count()).select_from(table)).scalar_one()


def test_seed_inserts_movies_genres_and_cast(db):
    assert count(db, Movie) == 10
    assert count(db, Genre) == 8
    assert count(db, CastMember) == 30
    assert count(db, movie_genres) == 24


def test_seed_is_idempotent(db):
    assert database_already_initialized(db)
    assert seed_movies(db) == 0
    assert count(db, Movie) == 10


def test_reset_reseeds_from_scratch(db):
    assert seed_movies(db, reset=True) == 10
    assert count(db, Movie) == 10
    assert count(db, Genre) == 8
    assert count(db, CastMember) == 30


def test_deleting_movie_cascades_to_cast_and_genre_links(db):
    db.execute(delete(Movie).where(Movie.id == 3))
    db.commit()

    assert count(db, Movie) == 9
    assert db.execute(select(CastMember).where(CastMember.movie_id == 3)).first() is None
    assert db.execute(select(movie_genres).where(movie_genres.c.movie_id == 3)).first() is None
    # genres themselves survive
    assert count(db, Genre) == 8


def test_deleting_genre_cascades_to_links(db):
    db.execute(delete(Genre).where(Genre.name == "Romance"))
    db.commit()

    forrest = db.get(Movie, 5)
    db.refresh(forrest)
    assert [g.name for g in forrest.genres] == ["Drama"]


def test_genre_names_are_unique(db):
    db.add(Genre(name="Drama"))
    with pytest.raises(IntegrityError):
        db.commit()
    db.rollback()


def test_association_requires_existing_rows(db):
    with pytest.raises(IntegrityError):
        db.execute(insert(movie_genres).values(movie_id=999, genre_id=1))
        db.commit()
    db.rollback()


def test_wait_for_db_returns_when_ready(engine):
    wait_for_db(engine, max_wait=0)


def test_wait_for_db_gives_up(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path}/missing/dir/movies.db")
    try:
        with pytest.raises(RuntimeError, match="did not become ready"):
            wait_for_db(engine, max_wait=0)
    finally:
        engine.dispose()
