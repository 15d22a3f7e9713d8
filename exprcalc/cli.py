# cli.py
"""Command-line front end: one-shot evaluation or an interactive REPL.

    exprcalc "2^10"          evaluate once and print the result
    exprcalc --degrees       start the REPL with trigonometry in degrees
    exprcalc -- "-2^2"       use -- when the expression starts with a minus

The REPL uses prompt_toolkit for line editing, a persistent input history
and completion of function and constant names.
"""

import argparse
import logging
import os
import sys
from typing import Dict, List, Optional, Tuple

from dotenv import load_dotenv
from prompt_toolkit import PromptSession
from prompt_toolkit.completion import WordCompleter
from prompt_toolkit.history import FileHistory
from pydantic import ValidationError

from . import registry
from .config import DEFAULT_SETTINGS_PATH, Settings, load_settings, save_settings
from .errors import ConfigError
from .history import ExpressionHistory
from .pipeline import Empty, Failure, evaluate, format_result
from .registry import AngleMode

logger = logging.getLogger(__name__)

HISTORY_FILE = os.path.expanduser("~/.exprcalc_history")
NO_EXPRESSION = "(no expression)"

_HELP_TOPICS: Dict[str, str] = {
    'general': (
        "Calculator REPL help:\n"
        "Type an arithmetic expression and press Enter.\n"
        "Examples:\n"
        "  2 + 3 * 4     -> 14\n"
        "  2^3^2         -> 64 ((2^3)^2)\n"
        "  -2^2          -> 4 ((-2)^2)\n"
        "  sin(pi/2)     -> 1 (radians)\n"
        "Commands:\n"
        "  :help [topic]  show help (topics: operators, functions)\n"
        "  :deg, :rad     trigonometric functions use degrees/radians\n"
        "  :mode          show the current angle mode\n"
        "  :history       show recent expressions\n"
        "  :histsize [N]  show or set how many expressions are kept (0-100)\n"
        "  :save          save the current settings\n"
        "  :exit, :quit   exit\n"
    ),
    'operators': (
        "Operators, lowest to highest precedence:\n"
        "  + -      addition, subtraction (left-assoc)\n"
        "  * /      multiplication, division (left-assoc)\n"
        "  ^ **     power (LEFT-assoc: 2^3^2 == (2^3)^2)\n"
        "  -        unary minus (binds tighter than ^: -2^2 == 4)\n"
        "Division by zero and domain errors give inf or nan, not an error.\n"
    ),
    'functions': (
        "Functions:\n  "
        + ", ".join(sorted(registry.FUNCTIONS)) +
        "\nConstants:\n  "
        + ", ".join(sorted(registry.CONSTANTS)) +
        "\nExamples: sqrt(2), log(10), sin(30) in degree mode\n"
    ),
}


def show_help(topic: Optional[str] = None) -> str:
    """Return help text for topic or general if None."""
    if not topic:
        return _HELP_TOPICS['general']
    key = topic.lower()
    return _HELP_TOPICS.get(key, f"No help available for topic '{topic}'")


class REPL:
    """Read-Eval-Print Loop for the calculator."""

    def __init__(self, settings: Optional[Settings] = None,
                 settings_path: Optional[str] = None, session=None):
        self.settings = settings if settings is not None else Settings()
        self.settings_path = settings_path
        self.history = ExpressionHistory(self.settings.history_size)
        self.history_file = HISTORY_FILE
        # Created on first use so that tests can run without a terminal.
        self.session = session

    def _get_session(self) -> PromptSession:
        if self.session is None:
            self.session = PromptSession(
                history=FileHistory(self.history_file),
                completer=WordCompleter(registry.names()),
            )
        return self.session

    def _process_command(self, line: str) -> Optional[str]:
        """Process commands starting with ':' or 'help'. Returns response string if a command, else None."""
        s = line.strip()
        if not s:
            return None
        if s.startswith(':'):
            body = s[1:].lstrip()
            if body == '':
                return "No command specified. Use :help for available commands."
            parts = body.split()
            return self._run_command(parts[0], parts[1:])
        if s.lower() == 'help' or s.lower().startswith('help '):
            parts = s.split(None, 1)
            return show_help(parts[1].strip() if len(parts) > 1 else None)
        return None

    def _run_command(self, cmd: str, args: List[str]) -> str:
        """Execute a REPL colon command. Raises EOFError for exit/quit."""
        cmd_lower = cmd.lower()
        if cmd_lower in {'exit', 'quit'}:
            raise EOFError()
        if cmd_lower == 'help':
            return show_help(args[0] if args else None)
        if cmd_lower in {'deg', 'degrees'}:
            self.settings.angle_mode = AngleMode.DEGREES
            return "Trigonometric functions use degrees"
        if cmd_lower in {'rad', 'radians'}:
            self.settings.angle_mode = AngleMode.RADIANS
            return "Trigonometric functions use radians"
        if cmd_lower == 'mode':
            return f"Angle mode: {self.settings.angle_mode.value}"
        if cmd_lower == 'history':
            entries = self.history.entries()
            if not entries:
                return "(no history)"
            return "\n".join(entries)
        if cmd_lower == 'histsize':
            return self._set_history_size(args)
        if cmd_lower == 'save':
            try:
                path = save_settings(self.settings, self.settings_path)
            except ConfigError as e:
                return f"Error saving settings: {e}"
            return f"Saved settings to {path}"
        return f"Unknown command: {cmd}"

    def _set_history_size(self, args: List[str]) -> str:
        if not args:
            return f"History size: {self.settings.history_size}"
        try:
            updated = Settings.model_validate(
                {**self.settings.model_dump(), 'history_size': args[0]}
            )
        except ValidationError:
            return f"Invalid history size: {args[0]} (expected 0 to 100)"
        self.settings.history_size = updated.history_size
        self.history.resize(updated.history_size)
        return f"History size: {updated.history_size}"

    def evaluate_line(self, line: str) -> Tuple[bool, str]:
        """Evaluate a single line (either command or expression). Returns (ok, output)."""
        cmd_out = self._process_command(line)
        if cmd_out is not None:
            return True, cmd_out

        result = evaluate(
            line,
            self.settings.angle_mode,
            max_length=self.settings.max_input_length,
            strict=self.settings.strict,
        )
        if isinstance(result, Failure):
            return False, f"Error: {result.message}"
        self.history.add(line.strip())
        if isinstance(result, Empty):
            return True, NO_EXPRESSION
        return True, format_result(result.value, self.settings.precision)

    def repl_loop(self) -> None:
        """Interactive loop. Ctrl-D or :exit leaves it, Ctrl-C discards the line."""
        print("Interactive Calculator REPL. Type :help for help. Ctrl-D or :exit to quit.")
        session = self._get_session()
        while True:
            try:
                line = session.prompt('> ')
            except KeyboardInterrupt:
                print("^C")
                continue
            except EOFError:
                print("Exiting.")
                break
            if not line.strip():
                continue
            try:
                ok, out = self.evaluate_line(line)
            except EOFError:
                print("Exiting.")
                break
            print(out)


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="exprcalc",
        description="Evaluate arithmetic expressions.",
    )
    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to evaluate. Starts the interactive REPL when omitted.",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "--degrees",
        dest="angle_mode",
        action="store_const",
        const=AngleMode.DEGREES,
        help="Trigonometric functions use degrees.",
    )
    mode.add_argument(
        "--radians",
        dest="angle_mode",
        action="store_const",
        const=AngleMode.RADIANS,
        help="Trigonometric functions use radians.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        default=None,
        help="Reject anything left over after a complete expression.",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_SETTINGS_PATH),
        help=f"Path to the settings file (default: {DEFAULT_SETTINGS_PATH}).",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_arg_parser().parse_args(argv)

    load_dotenv()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    try:
        settings = load_settings(args.config)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    if args.angle_mode is not None:
        settings.angle_mode = args.angle_mode
    if args.strict is not None:
        settings.strict = args.strict

    logger.debug(f"Using settings: {settings!r}")

    repl = REPL(settings, settings_path=args.config)
    if args.expression is not None:
        try:
            ok, out = repl.evaluate_line(args.expression)
        except EOFError:
            return 0
        print(out)
        return 0 if ok else 1

    repl.repl_loop()
    return 0


if __name__ == '__main__':
    sys.exit(main())
