"""
Tests for batch parsing: partial success, error aggregation, and multi-source loading.
"""

import pytest

from media_catalog import BatchParseError, MediaSource, Movie, parse_files, parse_lines
from media_catalog.exceptions import InvalidCategoryError, InvalidYearError

MOVIE_IMAGES_PATH = "./Data/filmplakater/"
SERIES_IMAGES_PATH = "./Data/serieforsider/"

GOOD_MOVIES = [
	"The Matrix; 1999; Action, Sci-fi; 8.7;",
	"// The Godfather; 1972; crime; drama; 9.2;",
	"Inception; 2010; Action, Sci-fi; 8.8;",
	"",
]


def test_clean_batch(matrix, inception):
	result = parse_lines(GOOD_MOVIES, MOVIE_IMAGES_PATH)
	assert result.ok
	assert result.error is None
	assert result.media == [matrix, inception]
	assert result.unwrap() == [matrix, inception]


def test_one_bad_line_does_not_stop_the_batch(matrix, inception):
	bad = "Bad Movie; 20o1; Action; 5.0;"
	lines = [GOOD_MOVIES[0], bad, GOOD_MOVIES[2]]
	result = parse_lines(lines, MOVIE_IMAGES_PATH)

	assert not result.ok
	assert result.media == [matrix, inception]
	error = result.error
	assert isinstance(error, BatchParseError)
	assert error.invalid_lines == [bad]
	assert error.successfully_parsed == [matrix, inception]
	assert isinstance(error.first_error, InvalidYearError)
	assert error.description == "Tried to parse Media, but could not parse year (int) from '20o1'."
	assert str(error) == (
		"Tried to parse Media, but could not parse year (int) from '20o1'. "
		"String: 'Bad Movie; 20o1; Action; 5.0;' Successfully parsed: 2 media."
	)


def test_first_failure_is_reported_and_all_bad_lines_kept(matrix):
	bad_category = "  Bad One; 2001; Actionn; 5.0;"
	bad_year = "Bad Two; x; Action; 5.0;"
	result = parse_lines([bad_category, GOOD_MOVIES[0], bad_year], MOVIE_IMAGES_PATH)

	assert result.media == [matrix]
	assert result.error.invalid_lines == [bad_category, bad_year]
	assert isinstance(result.error.first_error, InvalidCategoryError)
	assert "and 1 more." in str(result.error)
	assert str(result.error).startswith(result.error.description + " String: 'Bad One; 2001; Actionn; 5.0;'")

	with pytest.raises(BatchParseError):
		result.unwrap()


def test_parse_files_concatenates_sources(matrix, office):
	movies = MediaSource([GOOD_MOVIES[0]], MOVIE_IMAGES_PATH, "movies")
	series = MediaSource(
		["The Office; 2005-2013; Comedy; 8.9; 1-6, 2-22, 3-25, 4-19, 5-28, 6-26, 7-26, 8-24, 9-25;"],
		SERIES_IMAGES_PATH,
		"series",
	)
	result = parse_files([movies, series])
	assert result.ok
	assert result.media == [matrix, office]
	assert result.media[0].image_path.startswith(MOVIE_IMAGES_PATH)
	assert result.media[1].image_path.startswith(SERIES_IMAGES_PATH)


def test_parse_files_combines_errors(matrix):
	bad_movie = "Bad; 19x9; Action; 1.0;"
	bad_series = "Broken; 2000-; Drama; 7.0; 2-5;"
	movies = MediaSource([GOOD_MOVIES[0], bad_movie], MOVIE_IMAGES_PATH, "movies")
	series = MediaSource(["Severance; 2022-; Drama, Mystery; 8.7; 1-9;", bad_series], SERIES_IMAGES_PATH, "series")

	result = parse_files([movies, series])

	assert [m.title for m in result.media] == ["The Matrix", "Severance"]
	error = result.error
	assert error.description == "Tried to parse Media, but could not parse year (int) from '19x9'."
	assert error.invalid_lines == [bad_movie]
	assert error.successfully_parsed == result.media


def test_parse_files_reports_later_source_failure(matrix):
	bad_series = "Broken; 2000-; Drama; 7.0; 2-5;"
	movies = MediaSource([GOOD_MOVIES[0]], MOVIE_IMAGES_PATH, "movies")
	series = MediaSource([bad_series], SERIES_IMAGES_PATH, "series")

	result = parse_files([movies, series])

	assert result.media == [matrix]
	assert result.error.invalid_lines == [bad_series]
	assert result.error.successfully_parsed == [matrix]


def test_source_from_file(tmp_path):
	path = tmp_path / "film.txt"
	path.write_bytes("Amélie; 2001; Comedy, Romance; 8,3;\r\n// skipped\r\nHeat; 1995; Crime; 8.3;\r\n".encode("iso-8859-1"))

	source = MediaSource.from_file(str(path), image_dir="posters")
	assert source.lines == ["Amélie; 2001; Comedy, Romance; 8,3;", "// skipped", "Heat; 1995; Crime; 8.3;"]

	result = parse_files([source])
	assert result.media[0] == Movie("Amélie", 2001, ["comedy", "romance"], 8.3)
	assert result.media[0].image_path == "posters/Amélie.jpg"


def test_source_from_missing_file(tmp_path):
	with pytest.raises(FileNotFoundError):
		MediaSource.from_file(str(tmp_path / "missing.txt"))
