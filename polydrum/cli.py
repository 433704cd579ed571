"""Polyrhythm-aware MIDI drum pattern generator.

Each drum part takes a pattern in polydrum notation. Parts of different
lengths are looped until they all line up on a bar line of the chosen time
signature, and the result is written as a MIDI file.

Example:

    polydrum -K 8x--x--x- -S 4-x -s 4/4 -o out.mid
"""

import argparse
import logging
import typing

import polydrum.config
import polydrum.meter
import polydrum.notation
import polydrum.render


logger = logging.getLogger(__name__)

DEFAULT_TEMPO = 120
DEFAULT_TIME_SIGNATURE = "4/4"

# Command-line / config key for each part.
PART_OPTIONS = {
	"kick": polydrum.render.DrumPart.KICK_DRUM,
	"snare": polydrum.render.DrumPart.SNARE_DRUM,
	"hihat": polydrum.render.DrumPart.HI_HAT,
	"crash": polydrum.render.DrumPart.CRASH_CYMBAL,
}


def build_parser () -> argparse.ArgumentParser:

	"""
	Return the command-line parser. Every value defaults to None so that
	config file settings can fill the gaps.
	"""

	parser = argparse.ArgumentParser(prog="polydrum", description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
	parser.add_argument("-K", "--kick",           type=str,   default=None, help="Kick drum pattern")
	parser.add_argument("-S", "--snare",          type=str,   default=None, help="Snare drum pattern")
	parser.add_argument("-H", "--hihat",          type=str,   default=None, help="Hi-hat pattern")
	parser.add_argument("-C", "--crash",          type=str,   default=None, help="Crash cymbal pattern")
	parser.add_argument("-t", "--tempo",          type=float, default=None, help=f"Tempo in BPM (default: {DEFAULT_TEMPO})")
	parser.add_argument("-s", "--time-signature", type=str,   default=None, help=f"Time signature (default: {DEFAULT_TIME_SIGNATURE})")
	parser.add_argument("-o", "--output",         type=str,   default=None, help="MIDI file to write (omit for a dry run)")
	parser.add_argument("-B", "--follow-kick-drum-with-bass", action="store_true", help="Double the kick drum with a bass note")
	parser.add_argument("--limit",                type=int,   default=None, help=f"Maximum bars to search (default: {polydrum.meter.DEFAULT_CONVERGENCE_LIMIT})")
	parser.add_argument("--config",               type=str,   default=None, help="YAML file with default settings")
	parser.add_argument("-v", "--verbose",        action="store_true",       help="Enable debug logging")

	return parser


def _pick (value: typing.Any, config: typing.Dict[str, typing.Any], key: str, default: typing.Any) -> typing.Any:

	"""Command line first, then config, then the built-in default."""

	if value is not None:
		return value

	return config.get(key, default)


def main (argv: typing.Optional[typing.Sequence[str]] = None) -> int:

	"""
	Run the command line and return a process exit code.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	try:
		config = polydrum.config.load_config(args.config) if args.config else {}
	except (polydrum.config.ConfigError, OSError) as e:
		logger.error(f"Can't load the config file: {e}")
		return 1

	config_parts = config.get('parts') or {}

	blueprints: typing.Dict[polydrum.render.DrumPart, str] = {}

	for key, part in PART_OPTIONS.items():
		pattern = _pick(getattr(args, key), config_parts, key, None)
		if pattern is not None:
			blueprints[part] = str(pattern)

	if not blueprints:
		logger.error("No drum pattern was supplied, exiting...")
		return 1

	try:
		meter = polydrum.meter.Meter.parse(str(_pick(args.time_signature, config, 'time_signature', DEFAULT_TIME_SIGNATURE)))
	except ValueError as e:
		logger.error(f"Can't parse the time signature: {e}")
		return 1

	try:
		tempo = float(_pick(args.tempo, config, 'tempo', DEFAULT_TEMPO))
	except (TypeError, ValueError):
		logger.error(f"Tempo must be a number, got {config.get('tempo')!r}")
		return 1

	try:
		limit = int(_pick(args.limit, config, 'convergence_limit', polydrum.meter.DEFAULT_CONVERGENCE_LIMIT))
	except (TypeError, ValueError):
		logger.error(f"Convergence limit must be a whole number, got {config.get('convergence_limit')!r}")
		return 1

	if limit < 1:
		logger.error(f"Convergence limit must be positive, got {limit}")
		return 1

	parts = {}

	for part, pattern in blueprints.items():
		try:
			parts[part] = polydrum.notation.groups(pattern)
		except polydrum.notation.NotationError as e:
			logger.error(f"{part.display_name} pattern is malformed: {e}")
			return 1

	try:
		mid = polydrum.render.create_midi(
			parts,
			meter,
			description = polydrum.render.text_description(blueprints),
			tempo = tempo,
			follow_kick_with_bass = args.follow_kick_drum_with_bass,
			limit = limit,
		)
	except polydrum.meter.NonConvergenceError as e:
		logger.error(f"Parts {e}")
		return 1
	except ValueError as e:
		logger.error(f"Can't render the parts: {e}")
		return 1

	if args.output is None:
		logger.info("No output file path was supplied, dry run only")
		return 0

	try:
		mid.save(args.output)
	except OSError as e:
		logger.error(f"Failed to write {args.output}: {e}")
		return 1

	logger.info(f"{args.output} was written successfully")
	return 0
