from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from .. import movie_service, schemas
from ..config import Settings, get_settings
from ..database import get_db
from ..query import FilterSpec, normalize_filters

router = APIRouter(prefix="/movies", tags=["movies"])


def filter_params(
    q: Optional[str] = Query(None, description="Substring of title, director or cast"),
    query: Optional[str] = Query(None, description="Alias of q"),
    genre: Optional[str] = Query("all", description="Exact genre name or 'all'"),
    year: Optional[str] = Query("all", description="Release year or 'all'"),
    year_from: Optional[int] = Query(None, alias="yearFrom"),
    year_to: Optional[int] = Query(None, alias="yearTo"),
    sort_by: Optional[str] = Query("rating", alias="sortBy"),
    sort_order: Optional[str] = Query("desc", alias="sortOrder"),
) -> FilterSpec:
    return normalize_filters(
        query=query or q,
        genre=genre,
        year=year,
        year_from=year_from,
        year_to=year_to,
        sort_by=sort_by,
        sort_order=sort_order,
    )


@router.get("", response_model=schemas.MovieListOut)
def list_movies(
    filters: FilterSpec = Depends(filter_params),
    db: Session = Depends(get_db),
):
    return movie_service.list_movies(db, filters)


@router.get("/search", response_model=schemas.MovieListOut)
def search_movies(
    filters: FilterSpec = Depends(filter_params),
    db: Session = Depends(get_db),
):
    return movie_service.list_movies(db, filters)


@router.get("/popular", response_model=schemas.PopularMoviesOut)
def popular_movies(
    limit: Optional[int] = Query(None, description="Number of top rated movies"),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    limit = settings.popular_default_limit if limit is None else limit
    movies = movie_service.get_popular_movies(db, limit, settings.popular_max_limit)
    return schemas.PopularMoviesOut(movies=movies, total=len(movies), limit=limit)


@router.get("/{movie_id}", response_model=schemas.MovieOut)
def get_movie(movie_id: int, db: Session = Depends(get_db)):
    movie = movie_service.get_movie(db, movie_id)
    if not movie:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Movie not found")
    return movie
