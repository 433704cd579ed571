import logging

import mido

import polydrum.cli


def test_no_patterns (caplog) -> None:

	"""Running without any part is an error."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main([]) == 1

	assert "No drum pattern" in caplog.text


def test_malformed_pattern_names_the_part (caplog) -> None:

	"""A bad pattern exits with 1 and says which part was wrong."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-S", "3x-x"]) == 1

	assert "Snare Drum pattern is malformed" in caplog.text


def test_malformed_time_signature (caplog) -> None:

	"""A bad time signature exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "-s", "4/5"]) == 1

	assert "time signature" in caplog.text


def test_does_not_converge (caplog) -> None:

	"""Parts that need too many bars exit with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4xxx", "--limit", "2"]) == 1

	assert "does not converge" in caplog.text


def test_dry_run (tmp_path, caplog) -> None:

	"""Without -o nothing is written."""

	with caplog.at_level(logging.INFO):
		assert polydrum.cli.main(["-K", "4x-x-", "-H", "8xxxxxxxx"]) == 0

	assert "dry run" in caplog.text
	assert list(tmp_path.iterdir()) == []


def test_writes_file (tmp_path) -> None:

	"""With -o the file is saved with the requested tempo and bass track."""

	path = tmp_path / "out.mid"

	assert polydrum.cli.main(["-K", "4x--", "-s", "3/4", "-t", "90", "-B", "-o", str(path)]) == 0

	mid = mido.MidiFile(str(path))
	tempos = [msg.tempo for msg in mid.tracks[0] if msg.type == 'set_tempo']
	texts = [msg.text for msg in mid.tracks[0] if msg.type == 'text']

	assert tempos == [mido.bpm2tempo(90)]
	assert texts == ["Created using polydrum. Part blueprints:\nKick Drum - 4x--"]
	assert len(mid.tracks) == 2


def test_failed_save (tmp_path, caplog) -> None:

	"""An unwritable path exits with 1."""

	path = tmp_path / "missing" / "out.mid"

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "-o", str(path)]) == 1

	assert "Failed to write" in caplog.text


def test_config_supplies_defaults (tmp_path) -> None:

	"""Config file values are used when no flag is given, flags win otherwise."""

	config = tmp_path / "polydrum.yaml"
	config.write_text("tempo: 100\ntime_signature: 7/8\nparts:\n  kick: 8x-x-x-x\n  snare: 8--x---x\n")
	path = tmp_path / "out.mid"

	assert polydrum.cli.main(["--config", str(config), "-S", "8x------", "-t", "150", "-o", str(path)]) == 0

	mid = mido.MidiFile(str(path))
	meta = {msg.type: msg for msg in mid.tracks[0] if msg.is_meta}

	assert meta['set_tempo'].tempo == mido.bpm2tempo(150)
	assert meta['time_signature'].numerator == 7
	assert "Kick Drum - 8x-x-x-x" in meta['text'].text
	assert "Snare Drum - 8x------" in meta['text'].text


# ── bad settings ─────────────────────────────────────────────────────

def _config (tmp_path, text: str) -> str:

	path = tmp_path / "polydrum.yaml"
	path.write_text(text)

	return str(path)


def test_config_with_non_numeric_tempo (tmp_path, caplog) -> None:

	"""A tempo that is not a number exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--config", _config(tmp_path, "tempo: fast\n")]) == 1

	assert "Tempo must be a number" in caplog.text


def test_config_with_non_numeric_limit (tmp_path, caplog) -> None:

	"""A convergence limit that is not a number exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--config", _config(tmp_path, "convergence_limit: lots\n")]) == 1

	assert "Convergence limit" in caplog.text


def test_non_positive_limit (caplog) -> None:

	"""A limit below one exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--limit", "0"]) == 1

	assert "Convergence limit must be positive" in caplog.text


def test_config_with_parts_list (tmp_path, caplog) -> None:

	"""`parts` given as a list exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["--config", _config(tmp_path, "parts:\n  - kick\n")]) == 1

	assert "Can't load the config file" in caplog.text


def test_config_with_invalid_yaml (tmp_path, caplog) -> None:

	"""A config file that is not YAML exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--config", _config(tmp_path, "tempo: [1,\n")]) == 1

	assert "Can't load the config file" in caplog.text


def test_config_that_is_not_a_mapping (tmp_path, caplog) -> None:

	"""A config file holding a list exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--config", _config(tmp_path, "- 1\n- 2\n")]) == 1

	assert "Can't load the config file" in caplog.text


def test_config_path_is_a_directory (tmp_path, caplog) -> None:

	"""An unreadable config path exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "--config", str(tmp_path)]) == 1

	assert "Can't load the config file" in caplog.text


def test_oversized_time_signature (caplog) -> None:

	"""A numerator that does not fit in a MIDI file exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "-s", "300/4"]) == 1

	assert "Can't render the parts" in caplog.text


def test_zero_tempo (caplog) -> None:

	"""A tempo of zero exits with 1."""

	with caplog.at_level(logging.ERROR):
		assert polydrum.cli.main(["-K", "4x", "-t", "0"]) == 1

	assert "Tempo must be positive" in caplog.text
