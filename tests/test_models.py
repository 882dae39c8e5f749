"""
Unit tests for the Movie and Series records.
"""

import dataclasses

import pytest

from media_catalog import CategorySet, Media, Movie, Series


def test_image_path_joins_directory_and_title(matrix, office):
	assert matrix.image_path == "./Data/filmplakater/The Matrix.jpg"
	assert office.image_path == "./Data/serieforsider/The Office.jpg"


@pytest.mark.parametrize("image_dir, expected", [
	("./Data/filmplakater", "./Data/filmplakater/Alien.jpg"),
	("C:\\posters\\", "C:\\posters\\Alien.jpg"),
	("", "Alien.jpg"),
])
def test_image_path_normalizes_separator(image_dir, expected):
	assert Movie("Alien", 1979, ["horror"], 8.5, image_dir).image_path == expected


def test_categories_are_coerced_from_names(matrix):
	assert matrix.categories == CategorySet.from_names(["action", "sci-fi"])


def test_equality_is_structural_and_ignores_image_path():
	a = Movie("Alien", 1979, ["horror"], 8.5, "a/")
	b = Movie("Alien", 1979, CategorySet.from_names(["Horror"]), 8.5, "b/")
	assert a == b
	assert hash(a) == hash(b)
	assert len({a, b}) == 1
	assert a != Movie("Alien", 1979, ["horror"], 8.4)


def test_movie_never_equals_series():
	movie = Movie("Cosmos", 1980, ["documentary"], 9.3)
	series = Series("Cosmos", 1980, ["documentary"], 9.3)
	assert movie != series
	assert not movie.is_series
	assert series.is_series


def test_series_fields(office):
	assert office.has_ended
	assert office.end_year == 2013
	assert office.season_lengths[0] == 6
	assert office.episode_count == 201


def test_series_lengths_become_a_tuple():
	series = Series("Dark", 2017, ["drama"], 8.7, has_ended=True, end_year=2020, season_lengths=[10, 8, 8])
	assert series.season_lengths == (10, 8, 8)
	assert series == Series("Dark", 2017, ["drama"], 8.7, has_ended=True, end_year=2020, season_lengths=(10, 8, 8))
	assert series != Series("Dark", 2017, ["drama"], 8.7, has_ended=True, end_year=2020, season_lengths=(10, 8))


def test_invalid_records_are_rejected():
	with pytest.raises(ValueError):
		Movie("  ", 2000, ["drama"], 5.0)
	with pytest.raises(ValueError):
		Series("Dark", 2017, ["drama"], 8.7, season_lengths=(10, 0))


def test_records_are_immutable(matrix):
	with pytest.raises(dataclasses.FrozenInstanceError):
		matrix.title = "The Matrix Reloaded"


def test_to_line_layout(matrix, office):
	assert matrix.to_line() == "The Matrix; 1999; action, sci-fi; 8.7;"
	assert office.to_line() == (
		"The Office; 2005-2013; comedy; 8.9; 1-6, 2-22, 3-25, 4-19, 5-28, 6-26, 7-26, 8-24, 9-25;"
	)
	running = Series("Severance", 2022, ["drama", "mystery"], 8.7, season_lengths=(9,))
	assert running.to_line() == "Severance; 2022-; drama, mystery; 8.7; 1-9;"


def test_media_base_cannot_be_instantiated():
	with pytest.raises(TypeError):
		Media("Untitled", 2000, [], 5.0)


def test_single_category_name_is_accepted():
	movie = Movie("Heat", 1995, "crime", 8.3)
	assert movie.categories == CategorySet.from_names(["crime"])
	assert movie == Movie("Heat", 1995, ["crime"], 8.3)
