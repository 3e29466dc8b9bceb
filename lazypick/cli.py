"""Command-line front door for lazypick.

Reads one candidate per line from a file or stdin, applies persisted
preferences and CLI flags, runs the picker, and prints the choice.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from .config import config_overrides, save_preference
from .errors import ConfigError, InputReadError
from .log import get_logger, setup_logging
from .picker.session import DEFAULT_KEY_TIMEOUT_MS, pick
from .picker.types import LAYOUTS, Candidate, Confirmed, ConfirmedMany, PickerConfig
from .ui_theme import available_theme_names

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_CANCELLED = 1
EXIT_INPUT_ERROR = 2


def _positive_int(value: str) -> int:
    """argparse type for positive integer values."""
    try:
        parsed = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid integer value: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be >= 1")
    return parsed


def _unit_float(value: str) -> float:
    """argparse type for scores in ``[0, 1]``."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if not 0.0 <= parsed <= 1.0:
        raise argparse.ArgumentTypeError("value must be within [0, 1]")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypick",
        description="Pick lines from a file or stdin with an interactive fuzzy finder.",
    )
    parser.add_argument("file", nargs="?", default=None, help="Read candidates from FILE instead of stdin.")
    parser.add_argument("--title", default=None, help="Header shown above the list.")
    parser.add_argument("--multi", action="store_true", help="Allow selecting several items.")
    parser.add_argument("--no-vim", action="store_true", help="Disable j/k/g/G/q/'/' bindings.")
    parser.add_argument("--accessible", action="store_true", help="Start with screen-reader announcements on.")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--layout", choices=LAYOUTS, default=None, help="List layout.")
    parser.add_argument("--case-sensitive", action="store_true", help="Match case exactly.")
    parser.add_argument("--min-score", type=_unit_float, default=None, help="Drop matches scoring below this.")
    parser.add_argument("--max-items", type=_positive_int, default=None, help="Rows shown at once.")
    parser.add_argument(
        "--timeout",
        type=_positive_int,
        default=DEFAULT_KEY_TIMEOUT_MS // 1000,
        help="Cancel after this many seconds without input (default: %(default)s).",
    )
    parser.add_argument(
        "--delimiter",
        default=None,
        help="Split each line into text and description at the first DELIMITER.",
    )
    parser.add_argument("--print-id", action="store_true", help="Print the 0-based line number instead of the text.")
    parser.add_argument(
        "--save-defaults",
        action="store_true",
        help="Remember the theme, layout, and matching flags given here for later runs.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Log level for the log file.")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file.")
    return parser


def parse_candidates(lines: Sequence[str], delimiter: str | None = None) -> list[Candidate]:
    """Build candidates from input lines; blank lines are skipped.

    Identifiers are the 0-based line numbers in the input, blank lines
    included, so ``--print-id`` output maps back to the source.
    """
    candidates: list[Candidate] = []
    for idx, raw in enumerate(lines):
        line = raw.rstrip("\r\n")
        if not line.strip():
            continue
        text, description = line, ""
        if delimiter and delimiter in line:
            text, description = line.split(delimiter, 1)
            text, description = text.strip(), description.strip()
        candidates.append(Candidate(id=str(idx), text=text, description=description))
    return candidates


def _read_lines(path: str | None, stdin: TextIO) -> list[str]:
    if path is None or path == "-":
        return stdin.readlines()
    return Path(path).read_text(encoding="utf-8", errors="replace").splitlines()


def flag_preferences(args: argparse.Namespace) -> dict[str, object]:
    """Persistable preferences set explicitly on the command line."""
    prefs: dict[str, object] = {}
    if args.no_vim:
        prefs["vim_mode"] = False
    if args.accessible:
        prefs["accessibility"] = True
    if args.theme is not None:
        prefs["theme"] = args.theme
    if args.layout is not None:
        prefs["layout"] = args.layout
    if args.case_sensitive:
        prefs["case_sensitive"] = True
    if args.min_score is not None:
        prefs["min_score"] = args.min_score
    if args.max_items is not None:
        prefs["max_items"] = args.max_items
    return prefs


def build_config(args: argparse.Namespace, persisted: dict[str, object] | None = None) -> PickerConfig:
    """Merge persisted preferences with CLI flags; flags win."""
    fields = config_overrides(persisted)
    fields.update(flag_preferences(args))
    if args.title is not None:
        fields["title"] = args.title
    if args.multi:
        fields["multi_select"] = True
    fields["search_descriptions"] = args.delimiter is not None
    return PickerConfig(**fields)


def main(
    argv: Sequence[str] | None = None,
    *,
    stdin: TextIO | None = None,
    stdout: TextIO | None = None,
) -> int:
    """Parse CLI arguments, run the picker, and return the exit status.

    Exit status is 0 on a confirmed choice, 1 when the picker is cancelled,
    and 2 when candidates or keys cannot be read.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    args = build_parser().parse_args(argv)

    if args.log_file is not None or args.log_level.upper() != "WARNING":
        setup_logging(args.log_level, args.log_file)

    try:
        lines = _read_lines(args.file, stdin)
    except OSError as exc:
        sys.stderr.write(f"lazypick: cannot read {args.file}: {exc}\n")
        return EXIT_INPUT_ERROR

    candidates = parse_candidates(lines, args.delimiter)
    if not candidates:
        logger.info("no candidates on input")
        return EXIT_CANCELLED

    try:
        if args.save_defaults:
            for key, value in flag_preferences(args).items():
                save_preference(key, value)
        config = build_config(args)
    except ConfigError as exc:
        sys.stderr.write(f"lazypick: {exc}\n")
        return EXIT_INPUT_ERROR

    try:
        outcome = pick(candidates, config, key_timeout_ms=args.timeout * 1000, no_color=args.no_color)
    except InputReadError as exc:
        sys.stderr.write(f"lazypick: {exc}\n")
        return EXIT_INPUT_ERROR

    if isinstance(outcome, Confirmed):
        chosen: tuple[Candidate, ...] = (outcome.candidate,)
    elif isinstance(outcome, ConfirmedMany):
        chosen = outcome.candidates
    else:
        return EXIT_CANCELLED

    for candidate in chosen:
        stdout.write(f"{candidate.id if args.print_id else candidate.text}\n")
    stdout.flush()
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
