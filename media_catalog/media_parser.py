"""
Line parsing module.
Turns one catalog line into a Movie or Series in a single pass over its characters.

Line formats:
	movie:  title; releaseYear; category1, category2 ...; rating;
	series: title; releaseYear-[endYear]; category1, category2 ...; rating; 1-len1, 2-len2 ...;

A series without a hyphen after the year is recognised by its season list.
Lines starting with "//" are comments and produce no record.
"""

import re  # strict numeric field validation
from enum import Enum  # explicit scanner states
from typing import List, Optional, Union  # type annotations

from loguru import logger  # console logging

from .categories import CategorySet, suggest_category  # category validation
from .exceptions import (
	LineParseError,
	MissingTitleError,
	InvalidYearError,
	InvalidEndYearError,
	InvalidCategoryError,
	InvalidRatingError,
	InvalidSeasonFormatError,
	SeasonOrderError,
	PrematureEndError,
	TrailingCharactersError,
)
from .models import Media, Movie, Series  # records produced by the scanner


class ParsingState(Enum):
	TITLE = "title"
	RELEASE_YEAR = "release_year"
	END_YEAR = "end_year"
	CATEGORIES = "categories"
	RATING = "rating"
	SEASONS = "seasons"
	DONE = "done"


class MediaKind(Enum):
	"""What the scanner knows about the record so far."""
	UNDETERMINED = "undetermined"
	MOVIE = "movie"
	SERIES = "series"


COMMENT_PREFIX = "//"

# Pre-compiled patterns; only plain ASCII numbers are accepted
RE_INT = re.compile(r"[+-]?[0-9]+")
RE_FLOAT = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_ignored(line: str) -> bool:
	"""Comment lines and blank lines carry no record."""
	stripped = line.strip()
	return not stripped or stripped.startswith(COMMENT_PREFIX)


class LineScanner:
	"""
	Single-pass scanner for one line.
	step() consumes one character and returns a LineParseError instead of raising,
	finish() resolves movie vs. series and returns either the record or an error.
	"""

	def __init__(self, line: str, image_dir: str = ""):
		self.line = line  # raw input, kept for error reporting
		self.image_dir = image_dir  # base directory for the record's image path
		self.state = ParsingState.TITLE  # current field
		self.kind = MediaKind.UNDETERMINED  # movie/series evidence so far
		self.last = 0  # index just past the last consumed delimiter

		# Field values collected during the scan
		self.title = ""
		self.release_year = 0
		self.has_ended = False
		self.end_year = 0
		self.categories: List[str] = []
		self.rating = 0.0
		self.season_lengths: List[int] = []

	def scan(self) -> Union[Media, LineParseError]:
		for index, char in enumerate(self.line):
			if self.state is ParsingState.DONE:
				break
			error = self.step(index, char)
			if error is not None:
				return error
		return self.finish()

	def step(self, index: int, char: str) -> Optional[LineParseError]:
		state = self.state
		if state is ParsingState.TITLE:
			return self._close_title(index) if char == ";" else None
		if state is ParsingState.RELEASE_YEAR:
			return self._close_release_year(index, char) if char in (";", "-") else None
		if state is ParsingState.END_YEAR:
			return self._close_end_year(index) if char == ";" else None
		if state is ParsingState.CATEGORIES:
			return self._close_category(index, char) if char in (";", ",") else None
		if state is ParsingState.RATING:
			return self._close_rating(index) if char == ";" else None
		if state is ParsingState.SEASONS:
			return self._close_season(index, char) if char in (";", ",") else None
		return None

	def finish(self) -> Union[Media, LineParseError]:
		if self.state is not ParsingState.DONE:
			# A hyphen after the year promised a series
			if self.kind is MediaKind.SERIES:
				return PrematureEndError("Tried to parse Serie, but string ended prematurely.", self.line)
			if self.state is not ParsingState.SEASONS:
				return PrematureEndError("Tried to parse Media, but string ended prematurely.", self.line)
			if self.season_lengths:
				return PrematureEndError("Tried to parse Serie, but string ended prematurely.", self.line)
			# Stopped right after the rating with no seasons: a movie
			self.kind = MediaKind.MOVIE
		elif self.kind is MediaKind.UNDETERMINED:
			self.kind = MediaKind.SERIES if self.season_lengths else MediaKind.MOVIE

		rest = self.line[self.last:].strip()
		if rest:
			label = "Serie" if self.kind is MediaKind.SERIES else "Movie"
			return TrailingCharactersError(
				f"Tried to parse {label}, but string contained more characters than expected: '{rest}'.", self.line
			)
		return self._build()

	def _field(self, end: int) -> str:
		return self.line[self.last:end].strip()

	def _advance(self, index: int, state: ParsingState):
		self.last = index + 1
		self.state = state

	def _close_title(self, index: int) -> Optional[LineParseError]:
		self.title = self._field(index)
		if not self.title:
			return MissingTitleError("Tried to parse Media, but the title is empty.", self.line)
		self._advance(index, ParsingState.RELEASE_YEAR)
		return None

	def _close_release_year(self, index: int, char: str) -> Optional[LineParseError]:
		text = self._field(index)
		if not RE_INT.fullmatch(text):
			return InvalidYearError(f"Tried to parse Media, but could not parse year (int) from '{text}'.", self.line)
		self.release_year = int(text)
		if char == "-":
			self.kind = MediaKind.SERIES  # only series carry a year range
			self._advance(index, ParsingState.END_YEAR)
		else:
			self._advance(index, ParsingState.CATEGORIES)
		return None

	def _close_end_year(self, index: int) -> Optional[LineParseError]:
		text = self._field(index)
		if text:  # blank means still running
			if not RE_INT.fullmatch(text):
				return InvalidEndYearError(
					f"Tried to parse Media, but could not parse end year (int) from '{text}'.", self.line
				)
			self.has_ended = True
			self.end_year = int(text)
		self._advance(index, ParsingState.CATEGORIES)
		return None

	def _close_category(self, index: int, char: str) -> Optional[LineParseError]:
		text = self._field(index)
		if not CategorySet.is_valid_name(text):
			suggestion = suggest_category(text)
			return InvalidCategoryError(
				f"Tried to parse Media, but could not parse category from '{text}'.",
				self.line,
				hint=f"did you mean '{suggestion}'?" if suggestion else None,
			)
		self.categories.append(text)
		if char == ";":
			self._advance(index, ParsingState.RATING)
		else:
			self.last = index + 1  # next category
		return None

	def _close_rating(self, index: int) -> Optional[LineParseError]:
		text = self._field(index)
		normalized = text.replace(",", ".")  # decimal comma
		if not RE_FLOAT.fullmatch(normalized):
			return InvalidRatingError(f"Could not parse rating (float) from '{text}'.", self.line)
		self.rating = float(normalized)
		# Still unknown whether this is a movie; seasons decide
		self._advance(index, ParsingState.SEASONS)
		return None

	def _close_season(self, index: int, char: str) -> Optional[LineParseError]:
		entry = self.line[self.last:index]
		hyphen = entry.find("-")
		if hyphen == -1:
			return InvalidSeasonFormatError(
				f"Tried to parse Serie, but could not parse season and length from '{entry.strip()}'.", self.line
			)

		season_text = entry[:hyphen].strip()
		length_text = entry[hyphen + 1:].strip()
		if not RE_INT.fullmatch(season_text):
			return InvalidSeasonFormatError(
				f"Tried to parse Serie, but could not parse season from '{entry.strip()}'.", self.line
			)
		expected = len(self.season_lengths) + 1
		season = int(season_text)
		if season != expected:
			return SeasonOrderError(
				f"Tried to parse Serie, but season numbers are not in order (expected {expected}, got {season}).",
				self.line,
			)
		if not RE_INT.fullmatch(length_text):
			return InvalidSeasonFormatError(
				f"Tried to parse Serie, but could not parse season from '{entry.strip()}'.", self.line
			)
		length = int(length_text)
		if length <= 0:
			return InvalidSeasonFormatError(
				f"Tried to parse Serie, but season {season} has a non-positive length in '{entry.strip()}'.", self.line
			)

		self.season_lengths.append(length)
		if char == ";":
			self._advance(index, ParsingState.DONE)
		else:
			self.last = index + 1  # next season
		return None

	def _build(self) -> Media:
		categories = CategorySet.from_names(self.categories)  # names already validated
		if self.kind is MediaKind.SERIES:
			return Series(
				self.title,
				self.release_year,
				categories,
				self.rating,
				self.image_dir,
				has_ended=self.has_ended,
				end_year=self.end_year,
				season_lengths=tuple(self.season_lengths),
			)
		return Movie(self.title, self.release_year, categories, self.rating, self.image_dir)


def parse_line(line: str, image_dir: str = "") -> Optional[Media]:
	"""
	Parse a single line into a Movie or Series.
	Returns None for comment and blank lines; raises a LineParseError subclass for malformed lines.
	"""
	if is_ignored(line):
		logger.debug(f"[Parser] Ignoring line: '{line.strip()}'")
		return None

	result = LineScanner(line, image_dir).scan()
	if isinstance(result, LineParseError):
		logger.debug(f"[Parser] {result.kind}: {result.description}")
		raise result

	logger.debug(f"[Parser] Parsed {'series' if result.is_series else 'movie'} '{result.title}' ({result.release_year})")
	return result
