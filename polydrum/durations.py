"""Note lengths at a fixed resolution of 128 ticks per whole note.

Three layers build on each other:

- ``BasicLength`` - the seven power-of-two note values (whole down to 64th).
- ``Plain`` / ``Dotted`` - a basic length, optionally extended by half itself.
- ``Simple`` / ``Tied`` / ``Triplet`` - the length a notation group applies
  to each of its notes.

Every value (and every ``Group`` or ``Meter`` built on top of them) answers
``ticks()``, so ``duration_ticks()`` works uniformly across the whole model::

    import polydrum.durations as dur

    dur.duration_ticks(dur.SIXTEENTH)              # 8
    dur.duration_ticks(dur.FOURTH_DOTTED_TRIPLET)  # 32
"""

import dataclasses
import enum
import typing

import polydrum.constants.ticks


class KnownLength (typing.Protocol):

	"""Anything that can be measured in ticks."""

	def ticks (self) -> int:
		...


class DurationInvariantError (AssertionError):

	"""
	Raised when length arithmetic produces a value outside the seven basic lengths.

	This signals a bug in the arithmetic, never bad user input.
	"""


class BasicLength (enum.Enum):

	"""
	The seven representable note values, declared from longest to shortest.
	"""

	WHOLE = polydrum.constants.ticks.WHOLE_TICKS
	HALF = polydrum.constants.ticks.HALF_TICKS
	FOURTH = polydrum.constants.ticks.FOURTH_TICKS
	EIGHTH = polydrum.constants.ticks.EIGHTH_TICKS
	SIXTEENTH = polydrum.constants.ticks.SIXTEENTH_TICKS
	THIRTY_SECOND = polydrum.constants.ticks.THIRTY_SECOND_TICKS
	SIXTY_FOURTH = polydrum.constants.ticks.SIXTY_FOURTH_TICKS


	def ticks (self) -> int:

		"""Return the tick count of this length."""

		return self.value


	@classmethod
	def from_denominator (cls, denominator: int) -> "BasicLength":

		"""
		Map a note-value number (1 = whole, 4 = quarter, 64 = sixty-fourth) to a length.

		Raises:
			ValueError: If ``denominator`` is not one of 1, 2, 4, 8, 16, 32, 64.
		"""

		if denominator not in _BY_DENOMINATOR:
			raise ValueError(f"{denominator} is not a valid note length (expected one of {sorted(_BY_DENOMINATOR)})")

		return _BY_DENOMINATOR[denominator]


	@property
	def denominator (self) -> int:

		"""The note-value number this length is written as (e.g. 16 for a sixteenth)."""

		return polydrum.constants.ticks.WHOLE_TICKS // self.value


_BY_DENOMINATOR: typing.Dict[int, BasicLength] = {
	polydrum.constants.ticks.WHOLE_TICKS // length.value: length for length in BasicLength
}


@dataclasses.dataclass(frozen=True)
class Plain:

	"""A basic length with no modification."""

	length: BasicLength

	def ticks (self) -> int:
		return self.length.ticks()


@dataclasses.dataclass(frozen=True)
class Dotted:

	"""A basic length extended by half of itself."""

	length: BasicLength

	def ticks (self) -> int:
		base = self.length.ticks()
		return base + base // 2


Modifier = typing.Union[Plain, Dotted]


@dataclasses.dataclass(frozen=True)
class Simple:

	"""A single (possibly dotted) note value."""

	modifier: Modifier

	def ticks (self) -> int:
		return self.modifier.ticks()


@dataclasses.dataclass(frozen=True)
class Tied:

	"""Two note values sustained as one."""

	first: Modifier
	second: Modifier

	def ticks (self) -> int:
		return self.first.ticks() + self.second.ticks()


@dataclasses.dataclass(frozen=True)
class Triplet:

	"""
	Three notes in the time of two. Integer division truncates, so an eighth
	triplet is 10 ticks rather than 10.67.
	"""

	modifier: Modifier

	def ticks (self) -> int:
		return self.modifier.ticks() * 2 // 3


Duration = typing.Union[Simple, Tied, Triplet]


def duration_ticks (value: typing.Union[KnownLength, int]) -> int:

	"""
	Return the length of any length, duration, group or meter in ticks
	(128 per whole note). A plain integer is taken to be a tick count already.
	"""

	if isinstance(value, int):
		return value

	return value.ticks()


def _half_ticks (length: BasicLength) -> int:
	return length.ticks() // 2


def _from_half_ticks (half_ticks: int) -> BasicLength:

	for length in BasicLength:
		if _half_ticks(length) == half_ticks:
			return length

	raise DurationInvariantError(f"{half_ticks} half-ticks is not a basic length")


def combine (a: BasicLength, b: BasicLength) -> Duration:

	"""
	Add two basic lengths, producing the simplest equivalent duration.

	Two equal lengths (other than whole notes) double into the next larger
	length. Anything else becomes a tie: a whole note plus the remainder when
	the sum exceeds a whole note, otherwise the largest length shorter than the
	sum plus the remainder.

	Example:
		```python
		combine(BasicLength.HALF, BasicLength.HALF)
		# Simple(Plain(BasicLength.WHOLE))

		combine(BasicLength.HALF, BasicLength.SIXTY_FOURTH)
		# Tied(Plain(BasicLength.HALF), Plain(BasicLength.SIXTY_FOURTH))
		```
	"""

	if a == b and a != BasicLength.WHOLE:
		return Simple(Plain(_from_half_ticks(_half_ticks(a) * 2)))

	total = _half_ticks(a) + _half_ticks(b)
	whole = _half_ticks(BasicLength.WHOLE)

	if total > whole:
		return Tied(Plain(BasicLength.WHOLE), Plain(_from_half_ticks(total - whole)))

	# BasicLength is declared longest-first, so the first match is the largest.
	for length in BasicLength:
		if _half_ticks(length) < total:
			return Tied(Plain(length), Plain(_from_half_ticks(total - _half_ticks(length))))

	raise DurationInvariantError(f"Cannot combine {a} and {b}")


# Named lengths.

WHOLE = Simple(Plain(BasicLength.WHOLE))
HALF = Simple(Plain(BasicLength.HALF))
FOURTH = Simple(Plain(BasicLength.FOURTH))
EIGHTH = Simple(Plain(BasicLength.EIGHTH))
SIXTEENTH = Simple(Plain(BasicLength.SIXTEENTH))
THIRTY_SECOND = Simple(Plain(BasicLength.THIRTY_SECOND))
SIXTY_FOURTH = Simple(Plain(BasicLength.SIXTY_FOURTH))

WHOLE_TRIPLET = Triplet(Plain(BasicLength.WHOLE))
HALF_TRIPLET = Triplet(Plain(BasicLength.HALF))
FOURTH_TRIPLET = Triplet(Plain(BasicLength.FOURTH))
EIGHTH_TRIPLET = Triplet(Plain(BasicLength.EIGHTH))
SIXTEENTH_TRIPLET = Triplet(Plain(BasicLength.SIXTEENTH))
THIRTY_SECOND_TRIPLET = Triplet(Plain(BasicLength.THIRTY_SECOND))
SIXTY_FOURTH_TRIPLET = Triplet(Plain(BasicLength.SIXTY_FOURTH))

WHOLE_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.WHOLE))
HALF_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.HALF))
FOURTH_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.FOURTH))
EIGHTH_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.EIGHTH))
SIXTEENTH_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.SIXTEENTH))
THIRTY_SECOND_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.THIRTY_SECOND))
SIXTY_FOURTH_DOTTED_TRIPLET = Triplet(Dotted(BasicLength.SIXTY_FOURTH))
