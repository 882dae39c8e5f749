"""
Ranking module.
Fuzzy scoring of query tokens against titles and categories, and plain sorting of media.
"""

from enum import Enum
from functools import lru_cache
from typing import Callable, Dict, Iterable, List, Set, Tuple

from .categories import CATEGORY_NAMES
from .models import Media


def _bigrams(text: str) -> Set[Tuple[str, str]]:
	return {(text[i - 1], text[i]) for i in range(1, len(text))}


def calc_search_score(query: str, target: str) -> int:
	"""
	Score how well `target` matches `query`. Both must already be lowercase and trimmed.
	- +2 if the lengths are equal
	- +3 if the first characters match
	- +3 if the last characters match
	- +3 if the strings are equal
	- +1 per distinct character present in both
	- +1 per distinct adjacent character pair present in both
	"""
	if not query or not target:
		return 0

	score = 0
	if len(query) == len(target):
		score += 2
	if query[0] == target[0]:
		score += 3
	if query[-1] == target[-1]:
		score += 3
	if query == target:
		score += 3  # still counts shared characters and pairs below

	score += len(set(query) & set(target))
	score += len(_bigrams(query) & _bigrams(target))
	return score


def title_score(token: str, media: Media) -> int:
	"""Best score of the token against any word of the title."""
	return max((calc_search_score(token, word) for word in media.title.lower().split()), default=0)


def title_scores(token: str, media: Iterable[Media]) -> Dict[Media, int]:
	"""Map every media to its title score for one lowercase token."""
	return {m: title_score(token, m) for m in media}


@lru_cache(maxsize=None)
def category_scores(token: str) -> Tuple[int, ...]:
	"""
	Score of the token against each catalog category, indexed like CATEGORY_NAMES.
	Memoised globally: categories are fixed, so this never depends on a library.
	"""
	return tuple(calc_search_score(token, name) for name in CATEGORY_NAMES)


def category_match_scores(token: str, media: Iterable[Media]) -> Dict[Media, int]:
	"""Map every media to the best score among the categories it belongs to."""
	scores = category_scores(token)
	return {m: max((scores[i] for i in m.categories.indices()), default=0) for m in media}


class SortBy(Enum):
	"""What to sort media by."""
	TITLE = "title"  # alphabetical
	RELEASE_YEAR = "release_year"  # newest first
	RATING = "rating"  # highest first
	DEFAULT = "default"  # title, then newest first


class SortOrder(Enum):
	DEFAULT = "default"
	REVERSE = "reverse"


def default_sort_key(media: Media) -> Tuple[str, int]:
	"""Title ascending (ordinal, case-sensitive), then release year descending."""
	return (media.title, -media.release_year)


_SORT_KEYS: Dict[SortBy, Callable[[Media], object]] = {
	SortBy.TITLE: lambda m: m.title,
	SortBy.RELEASE_YEAR: lambda m: -m.release_year,
	SortBy.RATING: lambda m: -m.rating,
	SortBy.DEFAULT: default_sort_key,
}


def sort_media(
	media: Iterable[Media],
	sort_by: SortBy = SortBy.DEFAULT,
	order: SortOrder = SortOrder.DEFAULT,
) -> List[Media]:
	"""Return the media sorted by the selected key; REVERSE flips that ordering."""
	return sorted(media, key=_SORT_KEYS[sort_by], reverse=order is SortOrder.REVERSE)
