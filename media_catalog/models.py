"""
Data models for the media catalog.
Defines the immutable media records shared by the parser, the library and the search engine.
"""

from abc import ABC, abstractmethod  # Media is only a base for Movie and Series
# Import dataclass helpers to define frozen "record-like" classes without boilerplate
from dataclasses import dataclass, field, InitVar  # auto-generates __init__, __eq__, __hash__
# Import typing helpers for precise and self-documenting types
from typing import Tuple  # fixed-length season sequences

from .categories import CategorySet  # bitmask of categories

IMAGE_SUFFIX = ".jpg"  # every cover image uses the same extension


def build_image_path(image_dir: str, title: str) -> str:
	"""Join the image directory and title into the cover image path."""
	if not image_dir:  # no directory configured
		return title + IMAGE_SUFFIX
	if image_dir.endswith("/") or image_dir.endswith("\\"):  # separator already present
		return image_dir + title + IMAGE_SUFFIX
	return image_dir + "/" + title + IMAGE_SUFFIX


@dataclass(frozen=True)
class Media(ABC):
	"""
	Base record for both movies and series.
	All fields are immutable so a record can never change after it enters a library.
	Equality and hashing are structural and ignore the derived image path.
	"""
	title: str  # display title, never empty
	release_year: int  # year of (first) release
	categories: CategorySet  # categories as a bitmask; iterables of names are converted
	rating: float  # average rating, e.g. 8.7
	image_dir: InitVar[str] = ""  # directory of cover images; only used to derive image_path
	image_path: str = field(init=False, compare=False)  # image_dir + title + ".jpg"

	def __post_init__(self, image_dir: str):
		if not self.title or not self.title.strip():
			raise ValueError("Media title cannot be empty")
		# frozen dataclass: normalize fields through object.__setattr__
		if isinstance(self.categories, str):  # a single category name
			object.__setattr__(self, "categories", CategorySet.from_names([self.categories]))
		elif not isinstance(self.categories, CategorySet):
			object.__setattr__(self, "categories", CategorySet.from_names(self.categories))
		object.__setattr__(self, "image_path", build_image_path(image_dir, self.title))

	@property
	def is_series(self) -> bool:
		return False

	def _categories_field(self) -> str:
		return ", ".join(self.categories.names())

	@abstractmethod
	def to_line(self) -> str:
		"""Format the record back into its catalog line."""


@dataclass(frozen=True)
class Movie(Media):
	"""A single film; carries no fields beyond the shared ones."""

	def to_line(self) -> str:
		"""Format as `title; year; categories; rating;`."""
		return f"{self.title}; {self.release_year}; {self._categories_field()}; {self.rating};"


@dataclass(frozen=True)
class Series(Media):
	"""
	A series with its run and per-season episode counts.
	season_lengths[0] is the number of episodes in season 1.
	"""
	has_ended: bool = False  # whether the series has finished
	end_year: int = 0  # only meaningful when has_ended is True
	season_lengths: Tuple[int, ...] = ()  # episodes per season, in order

	def __post_init__(self, image_dir: str):
		super().__post_init__(image_dir)
		object.__setattr__(self, "season_lengths", tuple(self.season_lengths))  # lists -> tuple for hashing
		if any(length <= 0 for length in self.season_lengths):
			raise ValueError(f"Season lengths must be positive: {self.season_lengths}")

	@property
	def is_series(self) -> bool:
		return True

	@property
	def episode_count(self) -> int:
		return sum(self.season_lengths)

	def to_line(self) -> str:
		"""Format as `title; year-[endYear]; categories; rating; 1-n, 2-m;`."""
		end = str(self.end_year) if self.has_ended else ""
		seasons = ", ".join(f"{i}-{length}" for i, length in enumerate(self.season_lengths, 1))
		return f"{self.title}; {self.release_year}-{end}; {self._categories_field()}; {self.rating}; {seasons};"


@dataclass
class SearchResult:
	media: Media  # matched record
	score: int  # aggregate search score across all query tokens
