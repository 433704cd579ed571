"""Constants for polydrum.

- ``polydrum.constants.ticks`` - Tick counts of the basic note values (128 per whole note)
- ``polydrum.constants.gm_drums`` - General MIDI drum notes and channels used by the renderer
"""
