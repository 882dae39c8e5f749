"""
Data loading module.
Parses batches of catalog lines into media, collecting failures instead of stopping at the first one.
"""

# Standard libs for dataclasses, typing, and paths
from dataclasses import dataclass, field  # lightweight result containers
from typing import List, Optional, Sequence  # type hints
from pathlib import Path  # filesystem-safe paths

from .exceptions import BatchParseError, LineParseError  # failure reporting
from .media_parser import parse_line  # single-line parser
from .models import Media  # parsed records

# Console logging
from loguru import logger  # console logger

# Catalog text files are Latin-1 encoded
DEFAULT_ENCODING = "iso-8859-1"


@dataclass
class BatchParseResult:
	"""
	Outcome of parsing a batch: every record that parsed, plus the batch error if any line failed.
	"""
	media: List[Media] = field(default_factory=list)  # successfully parsed records, in input order
	error: Optional[BatchParseError] = None  # set when at least one line failed

	@property
	def ok(self) -> bool:
		return self.error is None

	def unwrap(self) -> List[Media]:
		"""Return the parsed media, or raise the batch error if the batch was not clean."""
		if self.error is not None:
			raise self.error
		return self.media


@dataclass
class MediaSource:
	"""
	One logical source of catalog lines (e.g. the movies file) and the directory of its cover images.
	"""
	lines: Sequence[str]  # raw text lines
	image_dir: str = ""  # base path for image_path
	name: str = "<lines>"  # label used in logs

	@classmethod
	def from_file(cls, filepath: str, image_dir: str = "", encoding: str = DEFAULT_ENCODING) -> "MediaSource":
		"""Read a text file into a source, one line per record."""
		filepath = Path(filepath)  # normalize path

		# Validate the file presence early to give clear error messages
		if not filepath.exists():
			raise FileNotFoundError(f"Media data file not found: {filepath}")

		logger.info(f"[DataLoader] Reading lines from {filepath}...")
		with open(filepath, "r", encoding=encoding) as f:
			lines = f.read().splitlines()  # drops "\n" and "\r\n" endings
		return cls(lines=lines, image_dir=image_dir, name=str(filepath))


def parse_lines(lines: Sequence[str], image_dir: str = "") -> BatchParseResult:
	"""
	Parse every line independently.
	A failing line is recorded and skipped; the rest of the batch is still parsed.
	"""
	media: List[Media] = []  # accumulator for parsed records
	invalid_lines: List[str] = []  # raw lines that failed
	first_error: Optional[LineParseError] = None  # the failure reported to the caller

	for line_num, line in enumerate(lines, 1):  # keep track of line number for diagnostics
		try:
			record = parse_line(line, image_dir)
		except LineParseError as e:
			logger.warning(f"[DataLoader] Skipping invalid line {line_num}: {e.description}")
			if first_error is None:
				first_error = e
			invalid_lines.append(line)
			continue
		if record is not None:  # comments and blank lines yield nothing
			media.append(record)

	if first_error is None:
		logger.debug(f"[DataLoader] Parsed {len(media)} media from {len(lines)} lines")
		return BatchParseResult(media=media)

	error = BatchParseError(first_error, invalid_lines, media)
	logger.info(f"[DataLoader] Parsed {len(media)} media; {len(invalid_lines)} invalid lines")
	return BatchParseResult(media=media, error=error)


def parse_files(sources: Sequence[MediaSource]) -> BatchParseResult:
	"""
	Parse several sources (each with its own image directory) and concatenate the results.
	If any source failed, the combined error reports the first failure's description and
	invalid lines, together with every record parsed from all sources.
	"""
	media: List[Media] = []  # combined records, in source order
	first_failure: Optional[BatchParseError] = None  # earliest failing source

	for source in sources:
		logger.info(f"[DataLoader] Parsing source {source.name} ({len(source.lines)} lines)")
		result = parse_lines(source.lines, source.image_dir)
		media.extend(result.media)
		if result.error is not None and first_failure is None:
			first_failure = result.error

	if first_failure is None:
		logger.info(f"[DataLoader] Successfully loaded {len(media)} media from {len(sources)} sources.")
		return BatchParseResult(media=media)

	combined = BatchParseError(first_failure.first_error, first_failure.invalid_lines, media)
	logger.warning(f"[DataLoader] {combined}")
	return BatchParseResult(media=media, error=combined)
