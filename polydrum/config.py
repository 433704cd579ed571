import logging
import os
import typing

import yaml


logger = logging.getLogger(__name__)

# Keys under ``parts`` in the config file, mapped to their command-line flags.
PART_KEYS = ("kick", "snare", "hihat", "crash")


class ConfigError (ValueError):

	"""Raised when a config file cannot be read as polydrum settings."""


def load_config (config_path: str = 'polydrum.yaml') -> typing.Dict[str, typing.Any]:

	"""
	Load default settings from a YAML file.

	Recognised keys are ``tempo``, ``time_signature``, ``convergence_limit`` and
	``parts`` (a mapping of kick/snare/hihat/crash to pattern strings). A missing
	or empty file yields an empty dict.

	Raises:
		ConfigError: If the file is not valid YAML, or its top level or
			``parts`` entry is not a mapping.

	Example:
		```yaml
		tempo: 140
		time_signature: 7/8
		parts:
		  kick: 8x--x--
		  hihat: 16x-x-x-x-x-x-x-
		```
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		try:
			config = yaml.safe_load(f)
		except yaml.YAMLError as e:
			raise ConfigError(f"Config file {config_path} is not valid YAML: {e}") from e

	if config is None:
		return {}

	if not isinstance(config, dict):
		raise ConfigError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")

	parts = config.get('parts') or {}

	if not isinstance(parts, dict):
		raise ConfigError(f"'parts' in {config_path} must be a mapping of part name to pattern, got {type(parts).__name__}")

	unknown = set(parts) - set(PART_KEYS)
	if unknown:
		logger.warning(f"Ignoring unknown parts in {config_path}: {sorted(unknown, key=str)}")

	return config
