from pydantic import BaseModel
from pydantic.config import ConfigDict
from typing import List, Literal, Optional


SortBy = Literal["title", "year", "rating"]
SortOrder = Literal["asc", "desc"]


# Movies
class MovieOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int
    genre: List[str] = []
    poster: str
    description: str
    rating: float
    director: str
    cast: List[str] = []
    runtime: int
    releaseDate: str


# Echo of the filters actually applied, defaults filled in
class FiltersOut(BaseModel):
    query: str = ""
    genre: str = "all"
    year: str = "all"
    yearFrom: Optional[int] = None
    yearTo: Optional[int] = None
    sortBy: SortBy = "rating"
    sortOrder: SortOrder = "desc"


class MovieListOut(BaseModel):
    movies: List[MovieOut]
    total: int
    filters: FiltersOut


class PopularMoviesOut(BaseModel):
    movies: List[MovieOut]
    total: int
    limit: int


class HealthOut(BaseModel):
    status: str
    database: bool
