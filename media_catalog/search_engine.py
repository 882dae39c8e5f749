"""
Search engine module.
Scores a media collection against free-text queries, caches per-token title scores,
and produces ranked results.
"""

import threading  # locks for shared score maps
import time  # search latency for logs
from concurrent.futures import ThreadPoolExecutor, as_completed  # optional per-token concurrency
from typing import Dict, Iterable, List, Optional, Tuple, TYPE_CHECKING  # type annotations

from loguru import logger  # console logging

from .models import Media, SearchResult  # records and ranked hits
from .ranking import category_match_scores, title_scores  # per-token scoring

if TYPE_CHECKING:
	from .library import MediaLibrary

DEFAULT_MAX_WORKERS = 4  # thread pool size for parallel token scoring


class SearchCache:
	"""
	Memoised title scores: lowercase token -> {media -> score}.
	Only valid for the exact membership it was computed on; the owning library clears it on every mutation.
	"""

	def __init__(self):
		self._entries: Dict[str, Dict[Media, int]] = {}
		self._lock = threading.Lock()
		self.hits = 0  # lookups answered from the cache
		self.misses = 0  # lookups that had to be computed

	def get(self, token: str) -> Optional[Dict[Media, int]]:
		with self._lock:
			entry = self._entries.get(token)
			if entry is None:
				self.misses += 1
			else:
				self.hits += 1
			return entry

	def put(self, token: str, scores: Dict[Media, int]) -> Dict[Media, int]:
		with self._lock:
			self._entries[token] = scores
		return scores

	def clear(self):
		with self._lock:
			self._entries.clear()

	def __contains__(self, token: str) -> bool:
		with self._lock:
			return token in self._entries

	def __len__(self) -> int:
		with self._lock:
			return len(self._entries)


class ScoreBoard:
	"""Aggregate scores for one search; merging adds per media and is safe across threads."""

	def __init__(self):
		self._scores: Dict[Media, int] = {}
		self._lock = threading.Lock()

	def merge(self, scores: Dict[Media, int]):
		with self._lock:
			for media, score in scores.items():
				self._scores[media] = self._scores.get(media, 0) + score

	def snapshot(self) -> Dict[Media, int]:
		with self._lock:
			return dict(self._scores)


def tokenize(query: str) -> List[str]:
	"""Whitespace-separated, lowercased query tokens."""
	return [token.lower() for token in query.split()]


def _score_token(
	token: str,
	media: List[Media],
	cache: Optional[SearchCache],
	use_cache: bool,
) -> Tuple[Dict[Media, int], Dict[Media, int]]:
	by_title = cache.get(token) if use_cache else None
	if by_title is not None:
		# a shared cache may hold scores for a different collection
		if any(m not in by_title for m in media):
			by_title = None
		elif len(by_title) > len(media):
			by_title = {m: by_title[m] for m in media}
	if by_title is None:
		by_title = title_scores(token, media)
		if use_cache:
			cache.put(token, by_title)
	return by_title, category_match_scores(token, media)


def aggregate_scores(
	media: List[Media],
	tokens: List[str],
	cache: Optional[SearchCache] = None,
	use_cache: bool = True,
	parallel: bool = False,
	max_workers: int = DEFAULT_MAX_WORKERS,
) -> Dict[Media, int]:
	"""Sum title and category scores of every token, per media."""
	use_cache = use_cache and cache is not None
	board = ScoreBoard()

	def score_token(token: str):
		by_title, by_category = _score_token(token, media, cache, use_cache)
		board.merge(by_title)
		board.merge(by_category)

	if parallel and tokens:
		with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(tokens)))) as executor:
			futures = [executor.submit(score_token, token) for token in tokens]
			for future in as_completed(futures):
				future.result()  # re-raise worker errors
	else:
		for token in tokens:
			score_token(token)

	return board.snapshot()


def rank_with_scores(
	media: Iterable[Media],
	query: str,
	cache: Optional[SearchCache] = None,
	limit: Optional[int] = None,
	use_cache: bool = True,
	parallel: bool = False,
	max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[SearchResult]:
	"""
	Rank media by how well they match every token of `query`.
	Order: aggregate score descending, then title ascending, then release year descending.
	`limit=None` returns everything.
	"""
	if limit is not None and limit < 0:
		raise ValueError(f"limit must be non-negative, got {limit}")

	snapshot = list(media)  # one consistent read of the collection
	tokens = tokenize(query)
	if not tokens or not snapshot or limit == 0:
		return []

	scores = aggregate_scores(snapshot, tokens, cache, use_cache, parallel, max_workers)

	def rank_key(m: Media):
		return (-scores[m], m.title, -m.release_year)

	if limit == 1:
		ordered = [min(scores, key=rank_key)]  # best hit without sorting everything
	else:
		ordered = sorted(scores, key=rank_key)[:limit]
	return [SearchResult(media=m, score=scores[m]) for m in ordered]


def rank_by_search(
	media: Iterable[Media],
	query: str,
	cache: Optional[SearchCache] = None,
	limit: Optional[int] = None,
	use_cache: bool = True,
	parallel: bool = False,
	max_workers: int = DEFAULT_MAX_WORKERS,
) -> List[Media]:
	"""Same ranking as rank_with_scores, returning only the media."""
	results = rank_with_scores(media, query, cache, limit, use_cache, parallel, max_workers)
	return [r.media for r in results]


class SearchEngine:
	"""
	High-level search API over a MediaLibrary.
	Uses the library's own search cache, so results stay correct across library mutations.
	"""

	def __init__(
		self,
		library: "MediaLibrary",
		use_cache: bool = True,  # memoise title scores per token
		parallel: bool = False,  # score tokens on a thread pool
		max_workers: int = DEFAULT_MAX_WORKERS,
	):
		self.library = library
		self.use_cache = use_cache
		self.parallel = parallel
		self.max_workers = max_workers
		logger.info(f"[Engine] Ready over {len(library)} media | cache={use_cache} | parallel={parallel}")

	def search(self, query: str, limit: Optional[int] = None) -> List[SearchResult]:
		"""Rank the library against `query` and return scored hits."""
		start = time.time()
		results = rank_with_scores(
			self.library.all(),
			query,
			self.library.search_cache,
			limit=limit,
			use_cache=self.use_cache,
			parallel=self.parallel,
			max_workers=self.max_workers,
		)
		elapsed_ms = (time.time() - start) * 1000
		logger.info(f"[Engine] '{query}' -> {len(results)} results in {elapsed_ms:.2f} ms")
		return results
