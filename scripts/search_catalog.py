"""
Load the catalog files and run a few sample searches.

This script:
1) Reads data/film.txt and data/serier.txt
2) Parses them into a MediaLibrary (reporting, not aborting on, bad lines)
3) Runs sample queries with and without the search cache

Usage:
    python -m scripts.search_catalog
"""

import time  # measure step timings
from pathlib import Path  # filesystem-safe paths

from loguru import logger  # console logging

from media_catalog import BatchParseError, MediaLibrary, MediaSource, SearchEngine, SortBy


SAMPLE_QUERIES = ["the matrix", "action", "crime drama", "office"]


def main():
	logger.info("=" * 60)
	logger.info("Media Catalog Search")
	logger.info("=" * 60)

	# Resolve project root and key paths
	root = Path(__file__).resolve().parents[1]  # project root
	data_dir = root / 'data'
	sources = [
		MediaSource.from_file(str(data_dir / 'film.txt'), image_dir=str(data_dir / 'filmplakater')),
		MediaSource.from_file(str(data_dir / 'serier.txt'), image_dir=str(data_dir / 'serieforsider')),
	]

	# 1) Load data; a batch error still leaves every valid record in the library
	logger.info("[1/3] Parsing catalog...")
	library = MediaLibrary()
	try:
		library.read_from_sources(sources)
	except BatchParseError as e:
		logger.warning(f"[OK] Loaded with {len(e.invalid_lines)} invalid lines: {e}")
	logger.info(f"[OK] Library holds {len(library)} media")

	# 2) Show the default ordering
	logger.info("[2/3] First titles in default order:")
	for media in library.sort_by(SortBy.DEFAULT)[:5]:
		logger.info(f"  {media.to_line()}")

	# 3) Search, cold and then warm cache
	logger.info("[3/3] Running sample queries...")
	engine = SearchEngine(library, use_cache=True)
	for query in SAMPLE_QUERIES:
		for attempt in ("cold", "warm"):
			t0 = time.time()
			results = engine.search(query, limit=3)
			logger.info(f"  '{query}' ({attempt}, {(time.time() - t0) * 1000:.2f} ms)")
		for i, r in enumerate(results, 1):
			logger.info(f"    {i}. [{r.score}] {r.media.title} ({r.media.release_year})")

	logger.info(f"Cache: {library.search_cache.hits} hits / {library.search_cache.misses} misses")


if __name__ == '__main__':
	main()
