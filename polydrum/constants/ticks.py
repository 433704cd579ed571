"""Tick-based timing constants.

Pattern arithmetic uses **128 ticks per whole note** (32 per quarter note) as
its time base. The finest representable value is the sixty-fourth note at
2 ticks, so a dotted sixty-fourth (3 ticks) is still a whole number.

MIDI files are written at ``MIDI_TICKS_PER_BEAT``; ``MIDI_TICKS_PER_TICK``
converts between the two.
"""

WHOLE_TICKS = 128
HALF_TICKS = 64
FOURTH_TICKS = 32
EIGHTH_TICKS = 16
SIXTEENTH_TICKS = 8
THIRTY_SECOND_TICKS = 4
SIXTY_FOURTH_TICKS = 2

# Standard MIDI file resolution.
MIDI_TICKS_PER_BEAT = 480
MIDI_TICKS_PER_TICK = MIDI_TICKS_PER_BEAT // FOURTH_TICKS

# A time_signature meta event stores its numerator in one byte.
MIDI_MAX_TIME_SIGNATURE_NUMERATOR = 255
