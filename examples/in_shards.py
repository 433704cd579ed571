"""A 13/4 figure against 4/4 - how long until the downbeats meet again?

The kick plays two eighths followed by twelve quarters (13/4 in total) while
the hi-hat keeps straight eighths in 4/4. The kick figure only lines up with
the bar line again after 13 bars; everything in between drifts.

Writes in_shards.mid next to this script.
"""

import logging
import pathlib

import polydrum
import polydrum.render

logging.basicConfig(level=logging.INFO)

meter = polydrum.Meter.parse("4/4")

blueprints = {
	polydrum.render.DrumPart.KICK_DRUM: "8x-12,4x",
	polydrum.render.DrumPart.SNARE_DRUM: "4-x-x",
	polydrum.render.DrumPart.HI_HAT: "8xxxxxxxx",
}

parts = {part: polydrum.groups(pattern) for part, pattern in blueprints.items()}

bars = polydrum.converges(meter, [polydrum.total_ticks(groups) for groups in parts.values()])
print(f"Parts line up after {bars} bars of {meter}")

mid = polydrum.render.create_midi(
	parts,
	meter,
	description = polydrum.render.text_description(blueprints),
	tempo = 132,
	follow_kick_with_bass = True,
)

mid.save(str(pathlib.Path(__file__).with_name("in_shards.mid")))
