"""
polydrum - a polyrhythm-aware drum pattern compiler.

Drum parts are written in a compact notation, e.g. ``16x--x-`` (a sixteenth
hit, two rests, a hit, a rest) or ``(3,8tx-x)4x`` (an eighth-triplet figure
played three times, then a quarter hit). polydrum parses each part into a
tree of groups with exact tick lengths (128 ticks per whole note) and works
out how many bars of a reference time signature it takes for every part to
land on a bar line at the same time.

Notation:

- ``x`` hit, ``-`` rest.
- ``1 2 4 8 16 32 64`` note length, ``8.`` dotted, ``8t`` triplet, ``8+16`` tied.
- ``3,`` repeat prefix, ``( ... )`` optional grouping.

Minimal example:

    ```python
    import polydrum

    kick = polydrum.groups("8x--x--x-")            # 8 eighths = one 4/4 bar
    snare = polydrum.groups("3,4-x-")              # 9 quarters
    meter = polydrum.Meter.parse("4/4")

    polydrum.converges(meter, [polydrum.total_ticks(kick), polydrum.total_ticks(snare)])
    ```

Package-level exports: ``groups``, ``Group``, ``Note``, ``Meter``,
``converges``, ``duration_ticks``, ``total_ticks``, ``NotationError``,
``NonConvergenceError``.
"""

import polydrum.durations
import polydrum.meter
import polydrum.notation
import polydrum.pattern


groups = polydrum.notation.groups
Group = polydrum.pattern.Group
Note = polydrum.pattern.Note
Meter = polydrum.meter.Meter
converges = polydrum.meter.converges
duration_ticks = polydrum.durations.duration_ticks
total_ticks = polydrum.pattern.total_ticks
NotationError = polydrum.notation.NotationError
NonConvergenceError = polydrum.meter.NonConvergenceError
