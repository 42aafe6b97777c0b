#!/usr/bin/env python3
"""
Director Script Player

Plays a visual-novel script against a console stage: dialogue lines are
printed, bracketed directives go through the action decoder.

The player is the host side of director_actions. It decides what is a
directive, hands those lines to ActionDecoder.decode() one at a time,
and applies the configured error policy:

	halt   stop at the first failing directive (default)
	skip   report the failure and carry on with the next line

Usage:
	director chapter1.txt
	director chapter1.txt --on-error skip -v
	director --interactive
	director --list-actions
"""

import sys
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Tuple

from director_actions import (
	ActionDecoder,
	ActionError,
	ActionResult,
	ConfigurationError,
	create_decoder,
	is_directive_line,
)
from director_actions.console import create_console_stage
from director_config import DirectorConfig, setup_configuration

logger = logging.getLogger(__name__)


@dataclass
class PlaybackReport:
	"""What happened while playing a script"""
	directives: int = 0
	dialogue_lines: int = 0
	errors: List[Tuple[int, ActionError]] = field(default_factory=list)
	halted: bool = False

	@property
	def ok(self) -> bool:
		return not self.errors


class ScriptPlayer:
	"""
	Feeds script lines to the decoder and dialogue to the textbox

	Args:
		decoder: ActionDecoder bound to the stage being driven
		config: DirectorConfig (playback section is used)
		show_line: Called with each dialogue line (defaults to print)
	"""

	def __init__(self, decoder: ActionDecoder, config: Optional[DirectorConfig] = None,
				 show_line: Optional[Callable[[str], None]] = None):
		self.decoder = decoder
		self.config = config if config is not None else DirectorConfig()
		self.show_line = show_line if show_line is not None else print

	def _is_ignored(self, text: str) -> bool:
		return not text or text.startswith(self.config.playback.comment_prefix)

	def play_line(self, line: str) -> Optional[ActionResult]:
		"""
		Play one script line

		Returns:
			The ActionResult for directive lines, None for anything else
		"""
		text = line.strip()
		if self._is_ignored(text):
			return None

		if is_directive_line(text):
			return self.decoder.decode(text)

		if self.config.playback.echo_dialogue:
			self.show_line(text)
		return None

	def play(self, lines: Iterable[str]) -> PlaybackReport:
		"""Play lines in order, applying the on_error policy"""
		report = PlaybackReport()

		for line_no, line in enumerate(lines, start=1):
			result = self.play_line(line)

			if result is None:
				if not self._is_ignored(line.strip()):
					report.dialogue_lines += 1
				continue

			report.directives += 1
			if not result.is_error:
				continue

			report.errors.append((line_no, result.error))
			if self.config.playback.on_error == "halt":
				logger.error(f"Line {line_no}: {result.error.message} (playback halted)")
				report.halted = True
				break
			logger.error(f"Line {line_no}: {result.error.message} (skipped)")

		return report

	def play_file(self, path) -> PlaybackReport:
		"""Play a UTF-8 script file"""
		with open(path, 'r', encoding='utf-8') as f:
			return self.play(f)


def configure_logging(config: DirectorConfig) -> None:
	handlers: List[logging.Handler] = [logging.StreamHandler()]
	if config.console.log_file:
		handlers.append(logging.FileHandler(config.console.log_file, encoding='utf-8'))
	logging.basicConfig(
		level=config.console.log_level,
		format='%(asctime)s %(levelname)s %(name)s: %(message)s',
		handlers=handlers,
	)


def run_interactive(decoder: ActionDecoder) -> None:
	"""Prompt loop: type directives, /help for the action list, /quit to leave"""
	print("=" * 60)
	print("  Director - interactive mode")
	print("  Type /help for actions, /quit to exit")
	print("=" * 60)
	print()

	while True:
		try:
			line = input("director> ").strip()
		except (EOFError, KeyboardInterrupt):
			print()
			break

		if not line:
			continue

		if line.lower() == "/quit":
			break

		if line.lower() == "/help":
			print("\nAvailable actions:")
			for _, help_text in decoder.registry.list_actions():
				print(f"  {help_text}")
			print()
			continue

		if not is_directive_line(line):
			print(f"  [dialogue] {line}")
			continue

		result = decoder.decode(line)
		if result.is_error:
			print(f"  [error] {result.error.message}")
		else:
			print(f"  [ok] {result.action}{result.arguments if result.arguments else ''}")


def main(argv=None) -> int:
	config, should_exit, _, args = setup_configuration(argv)
	if should_exit:
		return 0 if config is None else 1

	configure_logging(config)

	stage, _ = create_console_stage()
	try:
		decoder = create_decoder(stage)
	except ConfigurationError as e:
		logger.critical(f"Action table is invalid: {e}")
		return 1

	if args.list_actions:
		for _, help_text in decoder.registry.list_actions():
			print(help_text)
		return 0

	if args.interactive:
		run_interactive(decoder)
		return 0

	if not args.script:
		print("Error: a script file is required (or use --interactive)")
		return 1

	script_path = Path(args.script)
	if not script_path.exists():
		print(f"Error: script not found: {script_path}")
		return 1

	player = ScriptPlayer(decoder, config)
	report = player.play_file(script_path)

	logger.info(
		f"Played {report.directives} directives and {report.dialogue_lines} dialogue lines "
		f"with {len(report.errors)} error(s)"
	)
	return 1 if report.halted else 0


if __name__ == "__main__":
	sys.exit(main())
