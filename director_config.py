#!/usr/bin/env python3
"""
Configuration system for the director script player
Supports YAML files, CLI overrides, and programmatic access
"""

import yaml
import argparse
from pathlib import Path
from typing import Dict, Any, Optional
from dataclasses import dataclass, field
from copy import deepcopy
import logging


ERROR_POLICIES = ("halt", "skip")


@dataclass
class PlaybackConfig:
	"""How the player treats script lines"""
	on_error: str = "halt"  # halt, skip
	echo_dialogue: bool = True
	comment_prefix: str = "#"

	def to_dict(self) -> Dict[str, Any]:
		return {
			'on_error': self.on_error,
			'echo_dialogue': self.echo_dialogue,
			'comment_prefix': self.comment_prefix,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'PlaybackConfig':
		return cls(
			on_error=data.get('on_error', 'halt'),
			echo_dialogue=data.get('echo_dialogue', True),
			comment_prefix=data.get('comment_prefix', '#'),
		)


@dataclass
class ConsoleConfig:
	"""Console output and logging"""
	verbose: bool = False
	quiet: bool = False
	log_file: Optional[str] = None

	def to_dict(self) -> Dict[str, Any]:
		return {
			'verbose': self.verbose,
			'quiet': self.quiet,
			'log_file': self.log_file,
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'ConsoleConfig':
		return cls(
			verbose=data.get('verbose', False),
			quiet=data.get('quiet', False),
			log_file=data.get('log_file'),
		)

	@property
	def log_level(self) -> int:
		if self.verbose:
			return logging.DEBUG
		if self.quiet:
			return logging.WARNING
		return logging.INFO


@dataclass
class DirectorConfig:
	"""Complete configuration for the director script player"""
	playback: PlaybackConfig = field(default_factory=PlaybackConfig)
	console: ConsoleConfig = field(default_factory=ConsoleConfig)

	# Metadata
	config_version: str = "1.0"
	description: str = "Director Script Player Configuration"

	def to_dict(self) -> Dict[str, Any]:
		"""Convert to dictionary for YAML serialization"""
		return {
			'config_version': self.config_version,
			'description': self.description,
			'playback': self.playback.to_dict(),
			'console': self.console.to_dict(),
		}

	@classmethod
	def from_dict(cls, data: Dict[str, Any]) -> 'DirectorConfig':
		"""Create from dictionary (YAML loading)"""
		config = cls()

		if 'config_version' in data:
			config.config_version = str(data['config_version'])
		if 'description' in data:
			config.description = data['description']

		if isinstance(data.get('playback'), dict):
			config.playback = PlaybackConfig.from_dict(data['playback'])
		if isinstance(data.get('console'), dict):
			config.console = ConsoleConfig.from_dict(data['console'])

		return config


class ConfigurationManager:
	"""
	Manages configuration loading, merging, and validation
	"""

	def __init__(self, config_file: str = "director.yaml"):
		self.config_file = config_file
		self.config: Optional[DirectorConfig] = None
		self.config_file_path: Optional[Path] = None

		self.logger = logging.getLogger(__name__)

		# Standard config file locations (in order of preference)
		self.config_search_paths = [
			Path.cwd() / "director.yaml",  # Current directory
			Path.cwd() / "config" / "director.yaml",  # Config subdirectory
			Path.home() / ".config" / "director" / "config.yaml",  # User config
		]

	def load_config(self, config_file: Optional[str] = None) -> DirectorConfig:
		"""
		Load configuration from file with fallback chain

		Args:
			config_file: Specific config file path, or None for auto-discovery

		Returns:
			Loaded configuration object (defaults when nothing usable is found)
		"""
		if config_file:
			config_path = Path(config_file)
			if config_path.exists():
				self.config = self._load_yaml_file(config_path)
				self.config_file_path = config_path
				self.logger.info(f"Loaded config from: {config_path}")
			else:
				self.logger.warning(f"Config file not found: {config_path}")
				self.logger.info("Using default configuration")
		else:
			for path in self.config_search_paths:
				if path.exists():
					self.config = self._load_yaml_file(path)
					self.config_file_path = path
					self.logger.info(f"Auto-discovered config: {path}")
					break
			else:
				self.logger.info("No config file found, using defaults")

		if self.config is None:
			self.config = DirectorConfig()
		return self.config

	def _load_yaml_file(self, file_path: Path) -> DirectorConfig:
		"""Load configuration from YAML file, defaults on any read/parse error"""
		try:
			with open(file_path, 'r', encoding='utf-8') as f:
				yaml_data = yaml.safe_load(f) or {}
		except (OSError, yaml.YAMLError) as e:
			self.logger.error(f"Error loading config file {file_path}: {e}")
			return DirectorConfig()

		if not isinstance(yaml_data, dict):
			self.logger.error(f"Config file {file_path} does not contain a mapping")
			return DirectorConfig()

		for key in yaml_data:
			if key not in ('config_version', 'description', 'playback', 'console'):
				self.logger.warning(f"Unknown config key '{key}' in {file_path}")

		return DirectorConfig.from_dict(yaml_data)

	def merge_cli_args(self, args: argparse.Namespace) -> DirectorConfig:
		"""
		Merge CLI arguments into configuration (CLI takes precedence)

		Args:
			args: Parsed command line arguments

		Returns:
			Updated configuration
		"""
		if self.config is None:
			self.config = DirectorConfig()

		# Playback settings
		if getattr(args, 'on_error', None):
			self.config.playback.on_error = args.on_error
		if getattr(args, 'no_echo', False):
			self.config.playback.echo_dialogue = False

		# Console settings
		if getattr(args, 'verbose', False):
			self.config.console.verbose = True
		if getattr(args, 'quiet', False):
			self.config.console.quiet = True
		if getattr(args, 'log_file', None):
			self.config.console.log_file = args.log_file

		return self.config

	def save_config(self, file_path: Optional[str] = None) -> bool:
		"""
		Save current configuration to YAML file

		Args:
			file_path: Target file path, or None to use loaded file path

		Returns:
			True if saved successfully
		"""
		if file_path:
			target_path = Path(file_path)
		elif self.config_file_path:
			target_path = self.config_file_path
		else:
			target_path = Path(self.config_file)

		if self.config is None:
			self.config = DirectorConfig()

		try:
			target_path.parent.mkdir(parents=True, exist_ok=True)

			with open(target_path, 'w', encoding='utf-8') as f:
				f.write("# Director Script Player Configuration\n")
				f.write(f"# Version: {self.config.config_version}\n\n")

				yaml.dump(self.config.to_dict(), f,
						 default_flow_style=False,
						 sort_keys=False,
						 indent=2)

			self.logger.info(f"Configuration saved to: {target_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error saving config to {target_path}: {e}")
			return False

	def create_sample_config(self, file_path: str = "director_sample.yaml") -> bool:
		"""Create a sample configuration file with comments"""
		try:
			with open(file_path, 'w', encoding='utf-8') as f:
				f.write(self._generate_sample_yaml())
			self.logger.info(f"Sample configuration created: {file_path}")
			return True

		except OSError as e:
			self.logger.error(f"Error creating sample config: {e}")
			return False

	def _generate_sample_yaml(self) -> str:
		"""Generate sample YAML with comments"""
		return """# Director Script Player Configuration File

# =============================================================================
# PLAYBACK SETTINGS
# =============================================================================
playback:
  on_error: "halt"                # What a bad directive does: halt or skip
  echo_dialogue: true             # Print dialogue lines while playing
  comment_prefix: "#"             # Lines starting with this are ignored

# =============================================================================
# CONSOLE MESSAGES LOGGING LEVEL
# =============================================================================
console:
  verbose: false                  # Log every dispatched action (DEBUG)
  quiet: false                    # Only warnings and errors
  log_file: null                  # Also write the log to this file

# =============================================================================
# CONFIGURATION METADATA
# =============================================================================
config_version: "1.0"
description: "Director Script Player Configuration"
"""

	def validate_config(self) -> tuple[bool, list[str]]:
		"""
		Validate configuration for common issues

		Returns:
			(is_valid, list_of_errors)
		"""
		errors = []
		config = self.config if self.config is not None else DirectorConfig()

		if config.playback.on_error not in ERROR_POLICIES:
			errors.append(
				f"Invalid on_error: {config.playback.on_error}. "
				f"Must be one of: {', '.join(ERROR_POLICIES)}"
			)

		if not isinstance(config.playback.echo_dialogue, bool):
			errors.append(f"Invalid echo_dialogue: {config.playback.echo_dialogue!r}. Must be true or false")

		prefix = config.playback.comment_prefix
		if not isinstance(prefix, str) or not prefix:
			errors.append("comment_prefix must be a non-empty string")
		elif prefix.startswith("["):
			errors.append("comment_prefix cannot start with '[' (reserved for directives)")

		if config.console.verbose and config.console.quiet:
			errors.append("verbose and quiet cannot both be enabled")

		return len(errors) == 0, errors

	def get_config(self) -> DirectorConfig:
		"""Get a copy of the current configuration"""
		return deepcopy(self.config)


def create_argument_parser() -> argparse.ArgumentParser:
	"""Argument parser for the director script player"""
	parser = argparse.ArgumentParser(
		description='Director script player',
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog="""
Examples:
  %(prog)s chapter1.txt                    # Play a script with default settings
  %(prog)s chapter1.txt --on-error skip    # Report bad directives and keep going
  %(prog)s --interactive                   # Type directives at a prompt
  %(prog)s --list-actions                  # Show every available action
  %(prog)s -c my_config.yaml chapter1.txt  # Use specific config file
  %(prog)s --create-config sample.yaml     # Create sample config file

Configuration:
  Configuration is loaded in this order (later overrides earlier):
  1. Built-in defaults
  2. Configuration file (YAML)
  3. Command line arguments

  Config file search order:
  - director.yaml (current directory)
  - config/director.yaml
  - ~/.config/director/config.yaml
		"""
	)

	parser.add_argument(
		'script',
		nargs='?',
		help='Script file to play'
	)

	config_group = parser.add_argument_group('Configuration')
	config_group.add_argument(
		'-c', '--config',
		type=str,
		help='Configuration file path (YAML format)'
	)
	config_group.add_argument(
		'--create-config',
		type=str,
		metavar='FILE',
		help='Create sample configuration file and exit'
	)
	config_group.add_argument(
		'--save-config',
		type=str,
		metavar='FILE',
		help='Save current configuration to file'
	)

	playback_group = parser.add_argument_group('Playback')
	playback_group.add_argument(
		'--on-error',
		choices=ERROR_POLICIES,
		help='What a failing directive does: halt playback or skip the line'
	)
	playback_group.add_argument(
		'--no-echo',
		action='store_true',
		help='Do not print dialogue lines'
	)
	playback_group.add_argument(
		'-i', '--interactive',
		action='store_true',
		help='Read directives from a prompt instead of a file'
	)
	playback_group.add_argument(
		'--list-actions',
		action='store_true',
		help='List available actions and exit'
	)

	debug_group = parser.add_argument_group('Debug Options')
	debug_group.add_argument(
		'-v', '--verbose',
		action='store_true',
		help='Log every dispatched action'
	)
	debug_group.add_argument(
		'-q', '--quiet',
		action='store_true',
		help='Quiet mode (warnings and errors only)'
	)
	debug_group.add_argument(
		'--log-file',
		type=str,
		help='Log file path'
	)

	return parser


def setup_configuration(argv=None) -> tuple[Optional[DirectorConfig], bool, Optional[ConfigurationManager], argparse.Namespace]:
	"""
	Setup configuration system with CLI integration

	Args:
		argv: Command line arguments (None for sys.argv)

	Returns:
		(config_object, should_exit, config_manager, args)
		config_object is None when the run should exit successfully
		(e.g. --create-config) and a default config when it failed.
	"""
	parser = create_argument_parser()
	args = parser.parse_args(argv)

	# Handle special commands first
	if args.create_config:
		manager = ConfigurationManager()
		if manager.create_sample_config(args.create_config):
			print(f"Sample configuration created: {args.create_config}")
			print(f"Edit the file and run again with: -c {args.create_config}")
			return None, True, None, args
		return DirectorConfig(), True, None, args

	manager = ConfigurationManager()
	manager.load_config(args.config)
	config = manager.merge_cli_args(args)

	is_valid, errors = manager.validate_config()
	if not is_valid:
		print("Configuration errors:")
		for error in errors:
			print(f"  ✗ {error}")
		return DirectorConfig(), True, None, args

	if args.save_config:
		if manager.save_config(args.save_config):
			print(f"Configuration saved to: {args.save_config}")

	return config, False, manager, args
