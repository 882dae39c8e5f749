"""
Media Catalog - core package

Parsing and search for a catalog of movies and series:
- categories: fixed category catalog and the bitmask CategorySet
- models: immutable Movie/Series records
- media_parser: single-pass line parser
- data_loader: batch parsing that keeps going past bad lines
- library: MediaLibrary with its search cache
- ranking / search_engine: fuzzy scoring, caching and ordering
"""

from .categories import CATEGORY_NAMES, CategorySet
from .data_loader import BatchParseResult, MediaSource, parse_files, parse_lines
from .exceptions import BatchParseError, LineParseError, MediaCatalogError, UnknownCategoryError
from .library import MediaLibrary
from .media_parser import parse_line
from .models import Media, Movie, SearchResult, Series
from .ranking import SortBy, SortOrder, calc_search_score, sort_media
from .search_engine import SearchCache, SearchEngine, rank_by_search, rank_with_scores

__all__ = [
	"CATEGORY_NAMES",
	"CategorySet",
	"BatchParseResult",
	"MediaSource",
	"parse_files",
	"parse_lines",
	"BatchParseError",
	"LineParseError",
	"MediaCatalogError",
	"UnknownCategoryError",
	"MediaLibrary",
	"parse_line",
	"Media",
	"Movie",
	"SearchResult",
	"Series",
	"SortBy",
	"SortOrder",
	"calc_search_score",
	"sort_media",
	"SearchCache",
	"SearchEngine",
	"rank_by_search",
	"rank_with_scores",
]
