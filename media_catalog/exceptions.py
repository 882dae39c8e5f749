"""
Exception hierarchy for the media catalog.
Parse errors are produced as values by the line scanner and raised at the API boundary.
"""

from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
	from .models import Media


class MediaCatalogError(Exception):
	"""Base error with an optional hint appended to the message."""

	def __init__(self, message: str, hint: Optional[str] = None):
		self.message = message
		self.hint = hint
		super().__init__(self.format_error())

	def format_error(self) -> str:
		if self.hint:
			return f"{self.message} Hint: {self.hint}"
		return self.message


class UnknownCategoryError(MediaCatalogError, ValueError):
	"""A category name is not part of the fixed catalog."""

	def __init__(self, name: str, suggestion: Optional[str] = None):
		self.name = name
		self.suggestion = suggestion
		hint = f"did you mean '{suggestion}'?" if suggestion else None
		super().__init__(f"Unknown category '{name.strip()}'.", hint)


class LineParseError(MediaCatalogError):
	"""
	A single line could not be parsed into a Movie or Series.
	- line: the raw line as given to the parser
	- description: human-readable explanation naming the offending substring
	"""
	kind = "invalid-line"

	def __init__(self, description: str, line: str, hint: Optional[str] = None):
		self.description = description
		self.line = line
		super().__init__(description, hint)


class MissingTitleError(LineParseError):
	kind = "missing-title"


class InvalidYearError(LineParseError):
	kind = "invalid-year"


class InvalidEndYearError(LineParseError):
	kind = "invalid-end-year"


class InvalidCategoryError(LineParseError):
	kind = "invalid-category-name"


class InvalidRatingError(LineParseError):
	kind = "invalid-rating"


class InvalidSeasonFormatError(LineParseError):
	kind = "invalid-season-format"


class SeasonOrderError(LineParseError):
	kind = "out-of-order-season-number"


class PrematureEndError(LineParseError):
	kind = "premature-end-of-line"


class TrailingCharactersError(LineParseError):
	kind = "trailing-characters"


class BatchParseError(MediaCatalogError):
	"""
	One or more lines of a batch failed to parse.
	Carries the first failure, every offending raw line, and everything that did parse,
	so callers can still use the partial result.
	"""

	def __init__(
		self,
		first_error: LineParseError,
		invalid_lines: List[str],
		successfully_parsed: List["Media"],
	):
		self.first_error = first_error
		self.description = first_error.description
		self.invalid_lines = list(invalid_lines)
		self.successfully_parsed = list(successfully_parsed)

		# "<description> String: '<line>'[ and N more.] Successfully parsed: M media."
		message = f"{self.description} String: '{self.invalid_lines[0].strip()}'"
		if len(self.invalid_lines) > 1:
			message += f" and {len(self.invalid_lines) - 1} more."
		message += f" Successfully parsed: {len(self.successfully_parsed)} media."
		super().__init__(message)
