"""
Shared sample records for the test suite.
"""

import pytest

from media_catalog import MediaLibrary, Movie, Series

MOVIE_IMAGES_PATH = "./Data/filmplakater/"
SERIES_IMAGES_PATH = "./Data/serieforsider/"


@pytest.fixture
def matrix():
	return Movie("The Matrix", 1999, ["Action", "Sci-Fi"], 8.7, MOVIE_IMAGES_PATH)


@pytest.fixture
def inception():
	return Movie("Inception", 2010, ["Action", "Sci-fi"], 8.8, MOVIE_IMAGES_PATH)


@pytest.fixture
def dark_knight():
	return Movie("The Dark Knight", 2008, ["Action", "Crime", "Drama"], 9.0, MOVIE_IMAGES_PATH)


@pytest.fixture
def office():
	return Series(
		"The Office", 2005, ["Comedy"], 8.9, SERIES_IMAGES_PATH,
		has_ended=True, end_year=2013, season_lengths=(6, 22, 25, 19, 28, 26, 26, 24, 25),
	)


@pytest.fixture
def breaking_bad():
	return Series(
		"Breaking Bad", 2008, ["Crime", "Drama", "Thriller"], 9.5, SERIES_IMAGES_PATH,
		has_ended=True, end_year=2013, season_lengths=(1, 2, 3, 4, 5),
	)


@pytest.fixture
def game_of_thrones():
	return Series(
		"Game of Thrones", 2011, ["Action", "Adventure", "Drama"], 9.3, SERIES_IMAGES_PATH,
		has_ended=True, end_year=2019, season_lengths=(1, 2, 3, 4, 5, 6, 7, 8),
	)


@pytest.fixture
def library(matrix, inception, dark_knight, office, breaking_bad, game_of_thrones):
	return MediaLibrary([matrix, office, inception, breaking_bad, dark_knight, game_of_thrones])
