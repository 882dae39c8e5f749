"""
Media library module.
An unordered set of media that owns the search cache used when ranking it.
"""

from typing import Iterable, Iterator, List, Optional, Sequence

from loguru import logger

from .data_loader import BatchParseResult, MediaSource, parse_files
from .models import Media
from .ranking import SortBy, SortOrder, sort_media
from .search_engine import DEFAULT_MAX_WORKERS, SearchCache, rank_by_search


class MediaLibrary:
	"""
	Set of media records (duplicates collapse by structural equality).
	Every mutating method clears the search cache, so cached scores never outlive the membership they were computed for.
	"""

	def __init__(self, media: Iterable[Media] = (), max_workers: int = DEFAULT_MAX_WORKERS):
		self._media = set(media)
		self.search_cache = SearchCache()  # side table, never copied or persisted
		self.max_workers = max_workers  # used when searching in parallel

	def _invalidate(self):
		self.search_cache.clear()

	def add(self, media: Media):
		self._media.add(media)
		self._invalidate()

	def remove(self, media: Media):
		"""Remove a record; removing an absent record is a no-op."""
		self._media.discard(media)
		self._invalidate()

	def clear(self):
		self._media.clear()
		self._invalidate()

	def extend(self, media: Iterable[Media]):
		"""Add many records at once."""
		self._media.update(media)
		self._invalidate()

	def replace_all_from(self, batch: BatchParseResult):
		"""
		Replace the contents with a parsed batch.
		Everything that parsed is inserted first; a batch error is re-raised afterwards.
		"""
		self._media.clear()
		self._media.update(batch.media)
		self._invalidate()
		logger.info(f"[Library] Loaded {len(self._media)} media")
		if batch.error is not None:
			raise batch.error

	def read_from_sources(self, sources: Sequence[MediaSource]):
		"""Parse the sources and replace the library contents with the result."""
		self.replace_all_from(parse_files(sources))

	def contains(self, media: Media) -> bool:
		return media in self._media

	def all(self) -> List[Media]:
		"""Unordered snapshot of the current members."""
		return list(self._media)

	def clone(self) -> "MediaLibrary":
		"""New library with the same (shared, immutable) members and an empty cache."""
		return MediaLibrary(self._media, max_workers=self.max_workers)

	def sort_by(self, sort_by: SortBy = SortBy.DEFAULT, order: SortOrder = SortOrder.DEFAULT) -> List[Media]:
		return sort_media(self._media, sort_by, order)

	def sort_by_search(
		self,
		query: str,
		limit: Optional[int] = None,
		use_cache: bool = True,
		parallel: bool = False,
	) -> List[Media]:
		"""Rank the members against `query` using this library's cache."""
		return rank_by_search(
			self.all(),
			query,
			self.search_cache,
			limit=limit,
			use_cache=use_cache,
			parallel=parallel,
			max_workers=self.max_workers,
		)

	def __contains__(self, media: object) -> bool:
		return media in self._media

	def __iter__(self) -> Iterator[Media]:
		return iter(list(self._media))

	def __len__(self) -> int:
		return len(self._media)
