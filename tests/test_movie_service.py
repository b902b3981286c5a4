from types import SimpleNamespace

import pytest

from catalog import movie_service
from catalog.database import build_engine, build_session_factory
from catalog.errors import InvalidFilterError, StorageUnavailableError
from catalog.query import normalize_filters
from catalog.scripts.initialize_db import seed_movies
from catalog.seed_data import SEED_MOVIES

DEFAULT_ORDER = [1, 2, 3, 4, 10, 5, 6, 7, 8, 9]


def ids(movies):
    return [m.id for m in movies]


def search(db, **params):
    return movie_service.search_movies(db, normalize_filters(**params))


def test_no_constraints_returns_everything_by_rating_desc(db):
    movies = search(db, query="", genre="all", year="all")
    assert ids(movies) == DEFAULT_ORDER


def test_rating_desc_is_non_increasing(db):
    movies = search(db, sort_by="rating", sort_order="desc")
    for a, b in zip(movies, movies[1:]):
        assert a.rating >= b.rating


def test_dark_knight_scenario(db):
    movies = search(db, query="dark knight")

    assert len(movies) == 1
    movie = movies[0]
    assert movie.id == 3
    assert movie.year == 2008
    assert movie.rating == 9.0
    assert movie.genre == ["Action", "Crime", "Drama"]
    assert movie.cast == ["Christian Bale", "Heath Ledger", "Aaron Eckhart"]
    assert movie.releaseDate == "2008-07-18"


def test_year_1994_scenario(db):
    movies = search(db, year="1994")
    assert [m.title for m in movies] == [
        "The Shawshank Redemption",
        "Pulp Fiction",
        "Forrest Gump",
    ]


def test_query_matches_director_case_insensitively(db):
    assert ids(search(db, query="NOLAN")) == [3, 6, 9]
    assert ids(search(db, query="pher nOL")) == [3, 6, 9]


def test_query_matches_cast(db):
    # Tom Hanks and Tom Hardy, tied on 8.8 so id order breaks the tie
    assert ids(search(db, query="tom")) == [5, 6]


def test_query_match_on_one_actor_keeps_full_cast(db):
    (movie,) = search(db, query="heath ledger")
    assert movie.cast == ["Christian Bale", "Heath Ledger", "Aaron Eckhart"]


def test_query_wildcards_are_literal(db):
    assert search(db, query="%") == []
    assert search(db, query="_") == []


def test_genre_filter_includes_and_excludes(db):
    drama = ids(search(db, genre="Drama"))
    assert set(drama) == {m["id"] for m in SEED_MOVIES if "Drama" in m["genre"]}

    comedy = search(db, genre="Comedy")
    assert comedy == []


def test_genre_filter_keeps_all_genres_of_a_match(db):
    movies = search(db, genre="Crime")
    dark_knight = next(m for m in movies if m.id == 3)
    assert dark_knight.genre == ["Action", "Crime", "Drama"]


def test_genre_is_exact_not_substring(db):
    assert search(db, genre="drama") == []
    assert search(db, genre="Dram") == []


def test_constraints_combine_with_and(db):
    assert ids(search(db, query="nolan", genre="Sci-Fi")) == [6, 9]
    assert ids(search(db, query="nolan", genre="Sci-Fi", year="2014")) == [9]
    assert search(db, query="nolan", year="1994") == []


def test_year_range(db):
    assert ids(search(db, year_from=1990, year_to=1999)) == [1, 4, 5, 7, 8]
    assert ids(search(db, year_from=2009)) == [6, 9]
    assert ids(search(db, year_to=1980)) == [2]


def test_sort_by_title_ascending(db):
    movies = search(db, sort_by="title", sort_order="asc")
    assert ids(movies) == [5, 8, 6, 9, 4, 3, 2, 10, 7, 1]


def test_sort_by_year_ties_fall_back_to_id(db):
    assert ids(search(db, sort_by="year", sort_order="asc")) == [2, 8, 1, 4, 5, 7, 10, 3, 6, 9]
    assert ids(search(db, sort_by="year", sort_order="desc")) == [9, 6, 3, 10, 7, 1, 4, 5, 8, 2]


def test_same_filters_give_identical_results(db):
    first = search(db, query="the", sort_by="title")
    second = search(db, query="the", sort_by="title")
    assert first == second


def test_list_movies_echoes_effective_filters(db):
    result = movie_service.list_movies(db, normalize_filters(query="nolan", year="2010"))

    assert result.total == 1
    assert result.movies[0].title == "Inception"
    assert result.filters.query == "nolan"
    assert result.filters.genre == "all"
    assert result.filters.year == "2010"
    assert result.filters.sortBy == "rating"
    assert result.filters.sortOrder == "desc"


def test_popular_movies_truncates_after_sort(db):
    assert ids(movie_service.get_popular_movies(db, 3, max_limit=50)) == [1, 2, 3]
    assert ids(movie_service.get_popular_movies(db, 50, max_limit=50)) == DEFAULT_ORDER


@pytest.mark.parametrize("limit", [0, -1, 51])
def test_popular_movies_rejects_out_of_range_limit(db, limit):
    with pytest.raises(InvalidFilterError, match="limit"):
        movie_service.get_popular_movies(db, limit, max_limit=50)


def test_get_movie(db):
    movie = movie_service.get_movie(db, 7)
    assert movie.title == "The Matrix"
    assert movie.genre == ["Action", "Sci-Fi"]
    assert movie.cast == ["Keanu Reeves", "Laurence Fishburne", "Carrie-Anne Moss"]


def test_get_missing_movie_is_none(db):
    assert movie_service.get_movie(db, 999) is None


def test_list_genres_alphabetical(db):
    assert movie_service.list_genres(db) == [
        "Action",
        "Adventure",
        "Biography",
        "Crime",
        "Drama",
        "Romance",
        "Sci-Fi",
        "Thriller",
    ]


def test_movie_without_genres_or_cast_still_listed(db):
    seed_movies(
        db,
        [
            {
                "id": 50,
                "title": "Untitled Short",
                "year": 2020,
                "rating": 5.0,
                "director": "Nobody",
                "runtime": 12,
                "releaseDate": "2020-01-01",
            }
        ],
        reset=True,
    )
    (movie,) = search(db)
    assert movie.genre == []
    assert movie.cast == []
    assert movie.description == ""


def test_names_containing_commas_stay_whole(db):
    seed_movies(
        db,
        [
            {
                "id": 60,
                "title": "Iron Man",
                "year": 2008,
                "genre": ["Action, Adventure", "Sci-Fi"],
                "rating": 7.9,
                "director": "Jon Favreau",
                "cast": ["Robert Downey, Jr.", "Gwyneth Paltrow"],
                "runtime": 126,
                "releaseDate": "2008-05-02",
                "poster": "https://example.com/iron-man.jpg",
            }
        ],
        reset=True,
    )
    (movie,) = search(db, query="downey")
    assert movie.genre == ["Action, Adventure", "Sci-Fi"]
    assert movie.cast == ["Robert Downey, Jr.", "Gwyneth Paltrow"]


def _movie_row(movie_id):
    return SimpleNamespace(
        id=movie_id,
        title=f"Movie {movie_id}",
        year=1999,
        poster="",
        description="",
        rating=8.0,
        director="Someone",
        runtime=100,
        release_date="1999-01-01",
    )


def test_aggregate_rows_removes_cross_join_duplicates():
    movie = _movie_row(1)
    rows = [
        (movie, "Action", "Keanu Reeves"),
        (movie, "Action", "Carrie-Anne Moss"),
        (movie, "Sci-Fi", "Keanu Reeves"),
        (movie, "Sci-Fi", "Carrie-Anne Moss"),
    ]

    (record,) = movie_service.aggregate_rows(rows)
    assert record.genre == ["Action", "Sci-Fi"]
    assert record.cast == ["Keanu Reeves", "Carrie-Anne Moss"]


def test_aggregate_rows_keeps_one_record_per_movie():
    first, second = _movie_row(1), _movie_row(2)
    rows = [
        (first, "Drama", None),
        (second, None, "Tom Hanks"),
        (first, "Crime", None),
    ]

    records = movie_service.aggregate_rows(rows)
    assert [r.id for r in records] == [1, 2]
    assert records[0].genre == ["Drama", "Crime"]
    assert records[0].cast == []
    assert records[1].genre == []
    assert records[1].cast == ["Tom Hanks"]


def test_unreachable_storage_is_not_an_empty_result(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path}/missing/dir/movies.db")
    try:
        with build_session_factory(engine)() as session:
            with pytest.raises(StorageUnavailableError):
                movie_service.search_movies(session, normalize_filters())
            with pytest.raises(StorageUnavailableError):
                movie_service.list_genres(session)
            assert movie_service.check_database(session) is False
    finally:
        engine.dispose()


def test_check_database_ok(db):
    assert movie_service.check_database(db) is True


def _minimal_movie(movie_id, title, **extra):
    movie = {
        "id": movie_id,
        "title": title,
        "year": 2001,
        "rating": 7.0,
        "director": "Someone",
        "runtime": 100,
        "releaseDate": "2001-01-01",
    }
    movie.update(extra)
    return movie


def test_query_folds_case_beyond_ascii(db):
    seed_movies(
        db,
        [
            _minimal_movie(
                99,
                "Amélie",
                director="Jean-Pierre Jeunet",
                cast=["Audrey Tautou", "Mathieu Kassovitz"],
            ),
            _minimal_movie(98, "The Batman", director="Matt Reeves", cast=["Zoë Kravitz"]),
            _minimal_movie(97, "Straße", director="Ölaf Öberg"),
        ],
        reset=True,
    )

    assert ids(search(db, query="AMÉLIE")) == [99]
    assert ids(search(db, query="amélie")) == [99]
    assert ids(search(db, query="ZOË KRAVITZ")) == [98]
    assert ids(search(db, query="ölaf")) == [97]
    assert ids(search(db, query="STRASSE")) == [97]


def test_title_sort_ignores_accents(db):
    seed_movies(
        db,
        [
            _minimal_movie(1, "Zorro"),
            _minimal_movie(2, "Étoile"),
            _minimal_movie(3, "Alpha"),
            _minimal_movie(4, "etoile"),
        ],
        reset=True,
    )

    movies = search(db, sort_by="title", sort_order="asc")
    assert [m.title for m in movies] == ["Alpha", "etoile", "Étoile", "Zorro"]

    movies = search(db, sort_by="title", sort_order="desc")
    assert [m.title for m in movies] == ["Zorro", "Étoile", "etoile", "Alpha"]


def test_title_sort_key():
    assert movie_service.title_sort_key("Étoile") == ("etoile", "Étoile")
    assert movie_service.title_sort_key("Amélie")[0] < movie_service.title_sort_key("Zorro")[0]
