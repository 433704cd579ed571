import enum
import logging
import typing

import mido

import polydrum.constants.gm_drums
import polydrum.constants.ticks
import polydrum.meter
import polydrum.pattern


logger = logging.getLogger(__name__)

MidiEvent = typing.Tuple[int, typing.Union[mido.Message, mido.MetaMessage]]


class DrumPart (enum.Enum):

	"""
	The drum voices a pattern can be written for, in output order.
	"""

	KICK_DRUM = ("Kick Drum", polydrum.constants.gm_drums.KICK_1)
	SNARE_DRUM = ("Snare Drum", polydrum.constants.gm_drums.SNARE_1)
	HI_HAT = ("Hi-Hat", polydrum.constants.gm_drums.HI_HAT_CLOSED)
	CRASH_CYMBAL = ("Crash Cymbal", polydrum.constants.gm_drums.CRASH_1)

	def __init__ (self, display_name: str, note: int) -> None:

		self.display_name = display_name
		self.note = note


def text_description (blueprints: typing.Mapping[DrumPart, str]) -> str:

	"""
	Describe the patterns a file was built from, one line per part.
	"""

	lines = ["Created using polydrum. Part blueprints:"]

	for part in DrumPart:
		if part in blueprints:
			lines.append(f"{part.display_name} - {blueprints[part]}")

	return "\n".join(lines)


def create_midi (
	parts: typing.Mapping[DrumPart, typing.Sequence[polydrum.pattern.Group]],
	meter: polydrum.meter.Meter,
	description: str = "",
	tempo: float = 120,
	follow_kick_with_bass: bool = False,
	limit: int = polydrum.meter.DEFAULT_CONVERGENCE_LIMIT,
) -> mido.MidiFile:

	"""
	Render drum parts into a type 1 MIDI file.

	Every part loops until all parts finish together on a bar line of
	``meter``; see ``polydrum.meter.converges``.

	Parameters:
		parts: Parsed groups for each drum part that plays.
		meter: The time signature written to the file and used for bar alignment.
		description: Text stored in the file's first track.
		tempo: Beats per minute.
		follow_kick_with_bass: Add a bass track that plays on every kick hit.
		limit: Give up if the parts need this many bars or more.

	Raises:
		ValueError: If ``parts`` is empty, ``tempo`` is not positive, or the meter
			numerator does not fit in a MIDI file.
		polydrum.meter.NonConvergenceError: If the parts never line up within ``limit`` bars.
	"""

	if not parts:
		raise ValueError("At least one drum part is required")

	if tempo <= 0:
		raise ValueError(f"Tempo must be positive, got {tempo}")

	if meter.numerator > polydrum.constants.ticks.MIDI_MAX_TIME_SIGNATURE_NUMERATOR:
		raise ValueError(f"Time signature {meter} has more than {polydrum.constants.ticks.MIDI_MAX_TIME_SIGNATURE_NUMERATOR} notes per bar")

	part_ticks = {part: polydrum.pattern.total_ticks(groups) for part, groups in parts.items()}
	bars = polydrum.meter.converges(meter, part_ticks.values(), limit)
	total = bars * meter.ticks()

	logger.info(f"Rendering {len(parts)} part(s) over {bars} bar(s) of {meter}")

	mid = mido.MidiFile(type=1)
	mid.ticks_per_beat = polydrum.constants.ticks.MIDI_TICKS_PER_BEAT

	drum_events: typing.List[MidiEvent] = [
		(0, mido.MetaMessage('track_name', name="Drums")),
		(0, mido.MetaMessage('text', text=description)),
		(0, mido.MetaMessage('set_tempo', tempo=mido.bpm2tempo(tempo))),
		(0, mido.MetaMessage('time_signature', numerator=meter.numerator, denominator=meter.denominator.denominator)),
	]

	bass_events: typing.List[MidiEvent] = [
		(0, mido.MetaMessage('track_name', name="Bass")),
		(0, mido.Message('program_change', channel=polydrum.constants.gm_drums.BASS_CHANNEL, program=polydrum.constants.gm_drums.BASS_PROGRAM)),
	]

	for part in DrumPart:

		if part not in parts:
			continue

		events = _loop(parts[part], total // part_ticks[part])

		drum_events.extend(_note_events(events, polydrum.constants.gm_drums.DRUM_CHANNEL, part.note))

		if follow_kick_with_bass and part == DrumPart.KICK_DRUM:
			bass_events.extend(_note_events(events, polydrum.constants.gm_drums.BASS_CHANNEL, polydrum.constants.gm_drums.BASS_NOTE))

	mid.tracks.append(_to_track(drum_events, total))

	if follow_kick_with_bass:
		if DrumPart.KICK_DRUM not in parts:
			logger.warning("Bass doubling requested but there is no kick drum part")
		mid.tracks.append(_to_track(bass_events, total))

	return mid


def _loop (groups: typing.Sequence[polydrum.pattern.Group], repeats: int) -> typing.List[polydrum.pattern.Event]:

	"""
	Flatten a part and repeat it back to back.
	"""

	events: typing.List[polydrum.pattern.Event] = []
	length = polydrum.pattern.total_ticks(groups)

	for i in range(repeats):
		events.extend(polydrum.pattern.flatten(groups, start=i * length))

	return events


def _note_events (events: typing.Iterable[polydrum.pattern.Event], channel: int, note: int) -> typing.List[MidiEvent]:

	"""
	Turn every hit into a note_on / note_off pair at MIDI resolution.
	"""

	scale = polydrum.constants.ticks.MIDI_TICKS_PER_TICK
	messages: typing.List[MidiEvent] = []

	for event in events:

		if event.note != polydrum.pattern.Note.HIT:
			continue

		messages.append((event.start * scale, mido.Message('note_on', channel=channel, note=note, velocity=polydrum.constants.gm_drums.DEFAULT_VELOCITY)))
		messages.append(((event.start + event.duration) * scale, mido.Message('note_off', channel=channel, note=note, velocity=0)))

	return messages


def _event_order (event: MidiEvent) -> typing.Tuple[int, int]:

	"""
	Order by tick, then note_off before meta before everything else.

	A note_off must precede a note_on at the same tick or back-to-back hits
	on one note would cut each other off. The sort is stable, so meta events
	keep their header order.
	"""

	tick, message = event

	if message.type == 'note_off':
		return (tick, 0)

	if message.is_meta:
		return (tick, 1)

	return (tick, 2)


def _to_track (events: typing.List[MidiEvent], total: int) -> mido.MidiTrack:

	"""
	Sort absolute-time events and convert them to delta times.
	"""

	track = mido.MidiTrack()
	events = sorted(events, key=_event_order)
	last_tick = 0

	for tick, message in events:
		track.append(message.copy(time=tick - last_tick))
		last_tick = tick

	end = total * polydrum.constants.ticks.MIDI_TICKS_PER_TICK
	track.append(mido.MetaMessage('end_of_track', time=max(0, end - last_tick)))

	return track
