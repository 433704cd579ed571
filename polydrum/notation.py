import logging
import re
import typing

import polydrum.durations
import polydrum.pattern


logger = logging.getLogger(__name__)

T = typing.TypeVar("T")
Parsed = typing.Tuple[T, str]

_INTEGER = re.compile(r"[0-9]+")

_NOTES = {note.value: note for note in polydrum.pattern.Note}


class NotationError (Exception):

	"""
	Raised when drum notation cannot be parsed.

	Attributes:
		remaining: The unconsumed input at the point of failure.
		reason: A short description of what was expected.
	"""

	def __init__ (self, remaining: str, reason: str) -> None:

		super().__init__(f"{reason} at {remaining!r}" if remaining else f"{reason} at end of input")

		self.remaining = remaining
		self.reason = reason


def groups (notation: str) -> typing.List[polydrum.pattern.Group]:

	"""
	Parse a drum pattern into an ordered list of groups.

	Each group is a length followed by one or more notes, optionally prefixed
	by a repeat count and optionally wrapped in parentheses. Groups follow one
	another with no separator.

	**Syntax:**
	- `x` / `-`: A hit / a rest.
	- `16`: Note length as a fraction of a whole note (1, 2, 4, 8, 16, 32, 64).
	- `8.`: Dotted length.
	- `8t`: Triplet length (`8.t` is a dotted triplet).
	- `8+16`: Tied length.
	- `3,`: Repeat the group three times.
	- `( ... )`: Wrap a group; purely a visual separator.

	Returns:
		The groups in performance order.

	Raises:
		NotationError: If any part of the input is not valid notation. Partial
			results are never returned.

	Example:
		```python
		# 16th hits, three eighth-triplet hits, then a tied 16+32 group played three times
		groups("16x-xx-x-8txxx(3,16+32x-xx)4x-x-")
		```
	"""

	text = notation.strip()
	parsed: typing.List[polydrum.pattern.Group] = []

	parsed_group, text = group_or_delimited_group(text)
	parsed.append(parsed_group)

	while text:
		parsed_group, text = group_or_delimited_group(text)
		parsed.append(parsed_group)

	logger.debug(f"Parsed {notation!r} into {len(parsed)} group(s)")

	return parsed


def group_or_delimited_group (text: str) -> Parsed[polydrum.pattern.Group]:

	"""
	Parse one group, parenthesised or bare.
	"""

	return _first_of(text, "Expected a group", delimited_group, group)


def delimited_group (text: str) -> Parsed[polydrum.pattern.Group]:

	"""
	Parse a group wrapped in parentheses.
	"""

	text = _char(text, "(")
	result, text = group(text)
	text = _char(text, ")")

	return result, text


def group (text: str) -> Parsed[polydrum.pattern.Group]:

	"""
	Parse `N,` (optional repeat count), a length and at least one note.
	"""

	return _first_of(text, "Expected a group", _repeated_group, _single_group)


def _repeated_group (text: str) -> Parsed[polydrum.pattern.Group]:

	times, text = _integer(text)
	if times < 1:
		raise NotationError(text, f"Repeat count must be at least 1, got {times}")

	text = _char(text, ",")
	return _group_body(text, times)


def _single_group (text: str) -> Parsed[polydrum.pattern.Group]:

	return _group_body(text, 1)


def _group_body (text: str, times: int) -> Parsed[polydrum.pattern.Group]:

	group_length, text = length(text)
	notes, text = _notes(text)

	return polydrum.pattern.Group(notes=notes, length=group_length, times=times), text


def _notes (text: str) -> Parsed[typing.Tuple[polydrum.pattern.Note, ...]]:

	"""
	Parse one or more `x` / `-` notes.
	"""

	notes: typing.List[polydrum.pattern.Note] = []

	while text and text[0] in _NOTES:
		notes.append(_NOTES[text[0]])
		text = text[1:]

	if not notes:
		raise NotationError(text, "Expected a note ('x' or '-')")

	return tuple(notes), text


def length (text: str) -> Parsed[polydrum.durations.Duration]:

	"""
	Parse a note length: triplet, then tied, then simple.

	The order matters: `4.t` is a dotted-quarter triplet, and `4+8` is a tie
	rather than a quarter followed by stray input.
	"""

	return _first_of(text, "Expected a note length", _triplet_length, _tied_length, _simple_length)


def _triplet_length (text: str) -> Parsed[polydrum.durations.Duration]:

	modifier, text = modded_length(text)
	text = _char(text, "t")

	return polydrum.durations.Triplet(modifier), text


def _tied_length (text: str) -> Parsed[polydrum.durations.Duration]:

	first, text = modded_length(text)
	text = _char(text, "+")
	second, text = modded_length(text)

	return polydrum.durations.Tied(first, second), text


def _simple_length (text: str) -> Parsed[polydrum.durations.Duration]:

	modifier, text = modded_length(text)

	return polydrum.durations.Simple(modifier), text


def modded_length (text: str) -> Parsed[polydrum.durations.Modifier]:

	"""
	Parse a basic length with an optional trailing `.` (dotted).
	"""

	basic, text = basic_length(text)

	if text.startswith("."):
		return polydrum.durations.Dotted(basic), text[1:]

	return polydrum.durations.Plain(basic), text


def basic_length (text: str) -> Parsed[polydrum.durations.BasicLength]:

	"""
	Parse one of the permitted length numbers (1, 2, 4, 8, 16, 32, 64).
	"""

	value, rest = _integer(text)

	try:
		return polydrum.durations.BasicLength.from_denominator(value), rest
	except ValueError as e:
		raise NotationError(text, str(e)) from e


def _integer (text: str) -> Parsed[int]:

	match = _INTEGER.match(text)

	if match is None:
		raise NotationError(text, "Expected a number")

	return int(match.group()), text[match.end():]


def _char (text: str, expected: str) -> str:

	if not text.startswith(expected):
		raise NotationError(text, f"Expected {expected!r}")

	return text[len(expected):]


def _first_of (text: str, reason: str, *parsers: typing.Callable[[str], Parsed[T]]) -> Parsed[T]:

	"""
	Return the result of the first parser that succeeds on ``text``.

	Each alternative starts from the same input, so a failed attempt consumes
	nothing. If every alternative fails, the error from the one that got
	furthest is raised.
	"""

	furthest: typing.Optional[NotationError] = None

	for parser in parsers:
		try:
			return parser(text)
		except NotationError as e:
			if furthest is None or len(e.remaining) < len(furthest.remaining):
				furthest = e

	if furthest is None:
		raise NotationError(text, reason)

	raise furthest
