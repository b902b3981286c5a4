from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    ForeignKey,
    Table,
    func,
    Float
)
from sqlalchemy.orm import relationship

from .database import Base


movie_genres = Table(
    "movie_genres",
    Base.metadata,
    Column("movie_id", Integer, ForeignKey("movies.id", ondelete="CASCADE"), primary_key=True, index=True),
    Column("genre_id", Integer, ForeignKey("genres.id", ondelete="CASCADE"), primary_key=True, index=True),
)


class Movie(Base):
    __tablename__ = "movies"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)

    year = Column(Integer, nullable=False, index=True)
    rating = Column(Float, nullable=False, index=True)
    director = Column(String, nullable=False, index=True)
    runtime = Column(Integer, nullable=False)  # minutes
    release_date = Column(String, nullable=False)  # YYYY-MM-DD

    description = Column(Text, nullable=False)
    poster = Column(String, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    genres = relationship(
        "Genre",
        secondary=movie_genres,
        back_populates="movies",
        order_by="Genre.name",
        passive_deletes=True,
    )
    cast = relationship(
        "CastMember",
        back_populates="movie",
        order_by="CastMember.id",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class Genre(Base):
    __tablename__ = "genres"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, unique=True, nullable=False)

    movies = relationship(
        "Movie",
        secondary=movie_genres,
        back_populates="genres",
        passive_deletes=True,
    )


class CastMember(Base):
    __tablename__ = "cast_members"

    id = Column(Integer, primary_key=True, index=True)
    movie_id = Column(Integer, ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True)
    actor_name = Column(String, nullable=False, index=True)

    movie = relationship("Movie", back_populates="cast")
