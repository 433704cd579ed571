"""General MIDI note numbers for the parts polydrum renders.

Drums go out on GM channel 10 (0-indexed channel 9). The optional bass line
that doubles the kick drum uses its own channel and a fingered electric bass.
"""

DRUM_CHANNEL = 9

KICK_1 = 36
SNARE_1 = 38
HI_HAT_CLOSED = 42
CRASH_1 = 49

BASS_CHANNEL = 0
BASS_PROGRAM = 33	# Electric Bass (finger), 0-indexed
BASS_NOTE = 28		# E1

DEFAULT_VELOCITY = 100
