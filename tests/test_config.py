import logging

import pytest

import polydrum.config


def test_missing_file_returns_empty (tmp_path, caplog) -> None:

	"""A missing config file is a warning, not an error."""

	with caplog.at_level(logging.WARNING):
		assert polydrum.config.load_config(str(tmp_path / "nope.yaml")) == {}

	assert "not found" in caplog.text


def test_empty_file_returns_empty (tmp_path) -> None:

	"""An empty file has no settings."""

	path = tmp_path / "empty.yaml"
	path.write_text("")

	assert polydrum.config.load_config(str(path)) == {}


def test_load_values (tmp_path) -> None:

	"""Values are read as YAML."""

	path = tmp_path / "polydrum.yaml"
	path.write_text("tempo: 96\nconvergence_limit: 64\nparts:\n  hihat: 16x-\n")

	config = polydrum.config.load_config(str(path))

	assert config['tempo'] == 96
	assert config['convergence_limit'] == 64
	assert config['parts'] == {'hihat': '16x-'}


def test_unknown_parts_warn (tmp_path, caplog) -> None:

	"""Part names other than kick/snare/hihat/crash are reported."""

	path = tmp_path / "polydrum.yaml"
	path.write_text("parts:\n  cowbell: 4x\n")

	with caplog.at_level(logging.WARNING):
		polydrum.config.load_config(str(path))

	assert "cowbell" in caplog.text


def test_non_mapping_is_rejected (tmp_path) -> None:

	"""The top level must be a mapping."""

	path = tmp_path / "polydrum.yaml"
	path.write_text("- 1\n- 2\n")

	with pytest.raises(ValueError):
		polydrum.config.load_config(str(path))


def test_invalid_yaml_is_rejected (tmp_path) -> None:

	"""A YAML syntax error is reported as a config error."""

	path = tmp_path / "polydrum.yaml"
	path.write_text("tempo: [1,\n")

	with pytest.raises(polydrum.config.ConfigError):
		polydrum.config.load_config(str(path))


def test_parts_must_be_a_mapping (tmp_path) -> None:

	"""`parts` maps part names to patterns, a list is not accepted."""

	path = tmp_path / "polydrum.yaml"
	path.write_text("parts:\n  - kick\n")

	with pytest.raises(polydrum.config.ConfigError):
		polydrum.config.load_config(str(path))
