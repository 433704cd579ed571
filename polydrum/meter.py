"""Time signatures and polyrhythm convergence.

A ``Meter`` is a bar length: ``numerator`` notes of value ``denominator``.
``converges()`` answers the question "how many bars of this meter until every
pattern finishes a whole number of repetitions at the same time?"::

    import polydrum.meter

    four_four = polydrum.meter.Meter.parse("4/4")
    three_four = polydrum.meter.Meter.parse("3/4")

    polydrum.meter.converges(four_four, [three_four])   # 3
"""

import dataclasses
import functools
import logging
import math
import re
import typing

import polydrum.durations


logger = logging.getLogger(__name__)

DEFAULT_CONVERGENCE_LIMIT = 1000

LengthLike = typing.Union[polydrum.durations.KnownLength, int]

_METER = re.compile(r"^\s*([0-9]+)\s*/\s*([0-9]+)\s*$")

# Position of each length in BasicLength's declaration, longest first.
DENOMINATOR_RANK: typing.Dict[polydrum.durations.BasicLength, int] = {
	length: rank for rank, length in enumerate(polydrum.durations.BasicLength)
}


class NonConvergenceError (Exception):

	"""
	Raised when patterns need ``limit`` or more bars to line up with the meter.
	"""

	def __init__ (self, bars: int, limit: int) -> None:

		super().__init__(f"does not converge ({bars} bars needed, limit is {limit})")

		self.bars = bars
		self.limit = limit


def meter_sort_key (meter: "Meter") -> typing.Tuple[int, int]:

	"""
	Return the key meters are ordered by: numerator, then denominator rank.

	This is not a comparison of bar length. The denominator only breaks ties
	between equal numerators, and it is ranked by declaration order (whole
	first) rather than by duration. So 3/16 sorts before 4/4, and 4/4 sorts
	after 2/2 even though both bars are the same length.
	"""

	return (meter.numerator, DENOMINATOR_RANK[meter.denominator])


@functools.total_ordering
@dataclasses.dataclass(frozen=True, eq=True)
class Meter:

	"""
	A time signature: ``numerator`` notes of value ``denominator`` per bar.
	"""

	numerator: int
	denominator: polydrum.durations.BasicLength

	def __post_init__ (self) -> None:

		if self.numerator < 1:
			raise ValueError(f"Meter numerator must be positive, got {self.numerator}")


	@classmethod
	def parse (cls, text: str) -> "Meter":

		"""
		Parse a time signature written as ``N/D``, e.g. ``"7/8"``.

		Raises:
			ValueError: If the text is malformed or ``D`` is not a valid note length.
		"""

		match = _METER.match(text)

		if match is None:
			raise ValueError(f"Time signature must look like '4/4', got {text!r}")

		numerator = int(match.group(1))
		denominator = polydrum.durations.BasicLength.from_denominator(int(match.group(2)))

		return cls(numerator, denominator)


	def __str__ (self) -> str:

		return f"{self.numerator}/{self.denominator.denominator}"


	def __lt__ (self, other: object) -> bool:

		if not isinstance(other, Meter):
			return NotImplemented

		return meter_sort_key(self) < meter_sort_key(other)


	def __mul__ (self, factor: int) -> "Meter":

		"""Scale the number of notes per bar."""

		if not isinstance(factor, int):
			return NotImplemented

		return Meter(self.numerator * factor, self.denominator)


	def ticks (self) -> int:

		"""Return the length of one bar in ticks."""

		return self.denominator.ticks() * self.numerator


	def converges (self, lengths: typing.Iterable[LengthLike], limit: int = DEFAULT_CONVERGENCE_LIMIT) -> int:

		"""Shorthand for ``converges(self, lengths, limit)``."""

		return converges(self, lengths, limit)


def least_common_multiple (a: int, b: int) -> int:

	"""
	Return the smallest positive integer divisible by both ``a`` and ``b``.
	"""

	if a <= 0 or b <= 0:
		raise ValueError(f"Both values must be positive, got {a} and {b}")

	return a * b // math.gcd(a, b)


def converges (meter: Meter, lengths: typing.Iterable[LengthLike], limit: int = DEFAULT_CONVERGENCE_LIMIT) -> int:

	"""
	Return the number of bars after which every pattern ends on a bar line.

	Parameters:
		meter: The reference time signature.
		lengths: Anything with a tick length - groups, meters, durations or
			plain tick counts. Duplicates do not change the result.
		limit: The bar count at which to give up (default 1000).

	Returns:
		The smallest bar count, always less than ``limit``.

	Raises:
		NonConvergenceError: If ``limit`` or more bars would be needed.
		ValueError: If ``limit`` is not positive.

	Example:
		```python
		# A 3/4 figure against 4/4 lines up after three bars of 4/4
		converges(Meter(4, BasicLength.FOURTH), [Meter(3, BasicLength.FOURTH)])  # 3
		```
	"""

	if limit < 1:
		raise ValueError(f"Convergence limit must be positive, got {limit}")

	bar_ticks = meter.ticks()
	accumulated = bar_ticks

	for length in lengths:
		accumulated = least_common_multiple(polydrum.durations.duration_ticks(length), accumulated)

	bars = accumulated // bar_ticks

	if bars >= limit:
		logger.debug(f"Patterns need {bars} bars of {meter}, limit is {limit}")
		raise NonConvergenceError(bars, limit)

	return bars
