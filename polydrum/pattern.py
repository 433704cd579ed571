import dataclasses
import enum
import typing

import polydrum.durations


class Note (enum.Enum):

	"""An onset or a silence."""

	HIT = "x"
	REST = "-"


@dataclasses.dataclass(frozen=True)
class Group:

	"""
	An ordered run of notes (and nested groups) sharing one length, played ``times`` times.

	``length`` applies to the direct ``Note`` children only; a nested group
	keeps its own length and repeat count.
	"""

	notes: typing.Tuple[typing.Union[Note, "Group"], ...]
	length: polydrum.durations.Duration
	times: int = 1

	def __post_init__ (self) -> None:

		"""
		Freeze ``notes`` into a tuple and check the group invariants.
		"""

		object.__setattr__(self, "notes", tuple(self.notes))

		if not self.notes:
			raise ValueError("A group must contain at least one note")

		if self.times < 1:
			raise ValueError(f"Repeat count must be at least 1, got {self.times}")


	def ticks (self) -> int:

		"""
		Return the total length of the group in ticks, repeats included.
		"""

		note_ticks = self.length.ticks()
		total = 0

		for child in self.notes:
			if isinstance(child, Group):
				total += child.ticks()
			else:
				total += note_ticks

		return total * self.times


@dataclasses.dataclass(frozen=True)
class Event:

	"""
	A single note placed on the timeline, in ticks from the start of its part.
	"""

	start: int
	duration: int
	note: Note


def total_ticks (groups: typing.Iterable[Group]) -> int:

	"""
	Return the combined length of a sequence of top-level groups.
	"""

	return sum(group.ticks() for group in groups)


def flatten (groups: typing.Iterable[Group], start: int = 0) -> typing.List[Event]:

	"""
	Expand groups into timed events, unrolling repeats and nesting.

	Parameters:
		groups: Top-level groups in performance order.
		start: Tick offset of the first event (default 0).

	Returns:
		Events in time order. Rests are included so that callers can see
		the full grid; the last event ends at ``start + total_ticks(groups)``.

	Example:
		```python
		groups = polydrum.notation.groups("2,8x-")
		flatten(groups)
		# [Event(0, 16, HIT), Event(16, 16, REST), Event(32, 16, HIT), Event(48, 16, REST)]
		```
	"""

	events: typing.List[Event] = []
	position = start

	for group in groups:
		position = _flatten_group(group, position, events)

	return events


def _flatten_group (group: Group, position: int, events: typing.List[Event]) -> int:

	"""
	Append the events of one group starting at ``position``; return where it ends.
	"""

	note_ticks = group.length.ticks()

	for _ in range(group.times):
		for child in group.notes:
			if isinstance(child, Group):
				position = _flatten_group(child, position, events)
			else:
				events.append(Event(position, note_ticks, child))
				position += note_ticks

	return position
