"""
Category module.
Defines the fixed catalog of category names and the bitmask-backed CategorySet.
"""

# Import dataclass to get value semantics (eq/hash) from the mask alone
from dataclasses import dataclass  # frozen record over one int
# Typing helpers for the public API
from typing import Dict, Iterable, Iterator, List, Optional, Tuple  # type hints

from rapidfuzz import process, fuzz  # closest-name suggestions

from .exceptions import UnknownCategoryError  # raised for names outside the catalog


# Ordered catalog; the position of a name is its bit in the mask
CATEGORY_NAMES: Tuple[str, ...] = (
	"action", "adventure", "biography", "comedy", "crime", "drama",
	"family", "fantasy", "history", "horror", "mystery", "romance",
	"sci-fi", "sport", "thriller", "war", "western",
	"film-noir", "music", "musical",  # movies only
	"animation", "documentary", "talk-show",  # series only
)

CATEGORY_COUNT = len(CATEGORY_NAMES)  # 23
_VALID_MASK = (1 << CATEGORY_COUNT) - 1  # every valid bit set
_BITS: Dict[str, int] = {name: 1 << i for i, name in enumerate(CATEGORY_NAMES)}  # name -> bit

# Minimum rapidfuzz ratio for a suggestion to be offered
SUGGESTION_CUTOFF = 80


def suggest_category(name: str) -> Optional[str]:
	"""Return the catalog name closest to `name`, or None if nothing is close enough."""
	if not name or not name.strip():
		return None
	match = process.extractOne(name.strip().lower(), CATEGORY_NAMES, scorer=fuzz.ratio, score_cutoff=SUGGESTION_CUTOFF)
	return match[0] if match else None


@dataclass(frozen=True)
class CategorySet:
	"""
	Immutable set of categories packed into a single integer.
	Bit i is set when the set contains CATEGORY_NAMES[i].
	"""
	mask: int = 0

	def __post_init__(self):
		if self.mask & ~_VALID_MASK:
			raise ValueError(f"Category mask {self.mask:#x} has bits outside the {CATEGORY_COUNT} known categories")

	@classmethod
	def from_names(cls, names: Iterable[str]) -> "CategorySet":
		"""
		Build a set from category names (case-insensitive).
		Raises UnknownCategoryError for any name outside the catalog.
		"""
		mask = 0  # accumulator
		for name in names:
			bit = _BITS.get(name.strip().lower())  # lookup by normalized name
			if bit is None:
				raise UnknownCategoryError(name, suggest_category(name))
			mask |= bit  # union
		return cls(mask)

	@staticmethod
	def is_valid_name(name: str) -> bool:
		return name.strip().lower() in _BITS

	def contains(self, other: "CategorySet") -> bool:
		"""True when the two sets share at least one category."""
		return (self.mask & other.mask) != 0

	def indices(self) -> List[int]:
		return [i for i in range(CATEGORY_COUNT) if self.mask & (1 << i)]

	def names(self) -> List[str]:
		"""Names of the categories in this set, in catalog order."""
		return [CATEGORY_NAMES[i] for i in self.indices()]

	def __or__(self, other: "CategorySet") -> "CategorySet":
		return CategorySet(self.mask | other.mask)

	def __iter__(self) -> Iterator[str]:
		return iter(self.names())

	def __len__(self) -> int:
		return bin(self.mask).count("1")

	def __str__(self) -> str:
		names = [n[0].upper() + n[1:] for n in self.names()]  # capitalize first letter only
		if not names:
			return "None"
		if len(names) == 1:
			return names[0]
		return ", ".join(names[:-1]) + " and " + names[-1]
