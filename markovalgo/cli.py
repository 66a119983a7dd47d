#!/usr/bin/env python3
"""
markovalgo Command-Line Interface

Applies a Markov algorithm scheme, read from a UTF-8 file, to an input word.

Usage:
    markovalgo -s scheme.markov -l 100 WORD          # Apply with a step limit
    markovalgo -s scheme.markov -l 100 -t WORD       # ... and print the trace
    markovalgo -s scheme.markov -i WORD              # Step through interactively
    markovalgo -s scheme.markov -a abc -e '|' -l 50 WORD

Scheme files contain one formula per line, e.g.:
    a→b
    b→c
    c→⋅4

Exit codes:
    0  the application finished (or reached the limit without --strict)
    1  the scheme, alphabet or word is invalid, or --strict and the limit was hit
    2  invalid command-line usage
"""

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import __version__
from .alphabet import Alphabet, DEFAULT_DELIMITER, DEFAULT_FINAL_MARKER
from .engine import Outcome
from .errors import MarkovError, StepLimitExceeded
from .scheme import Scheme, SchemeBuilder, load_definitions

logger = logging.getLogger(__name__)

# Budget of an interactive session when no --limit is given
DEFAULT_INTERACTIVE_LIMIT = 1_000_000


def positive_int(value: str) -> int:
    """argparse type for --limit."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number of steps: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError("the number of steps must be at least 1")
    return number


def single_char(value: str) -> str:
    """argparse type for --delimiter and --final-marker."""
    if len(value) != 1:
        raise argparse.ArgumentTypeError(f"expected a single character, got {value!r}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="markovalgo",
        description="Apply Markov algorithm schemes to words.",
        epilog="Examples:\n"
               "  markovalgo -s count.markov -l 1000 aabac       Apply the scheme\n"
               "  markovalgo -s count.markov -l 1000 -t aabac    Show every step\n"
               "  markovalgo -s count.markov -i aabac            Step interactively\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "word",
        metavar="INPUT",
        help="Input word"
    )

    parser.add_argument(
        "-s", "--scheme",
        required=True,
        metavar="PATH",
        help="UTF-8 file with the scheme, one formula per line (empty lines are forbidden)"
    )

    parser.add_argument(
        "-a", "--alphabet",
        metavar="CHARS",
        help="Characters of the alphabet (default: Latin letters, digits and '|')"
    )

    parser.add_argument(
        "-e", "--alphabet-extension",
        metavar="CHARS",
        help="Auxiliary characters added to the alphabet (requires --alphabet)"
    )

    parser.add_argument(
        "-d", "--delimiter",
        type=single_char,
        metavar="CHAR",
        help="Delimiter between pattern and replacement (default: →)"
    )

    parser.add_argument(
        "-f", "--final-marker",
        type=single_char,
        metavar="CHAR",
        help="Marker of final formulas, placed after the delimiter (default: ⋅)"
    )

    parser.add_argument(
        "-l", "--limit",
        type=positive_int,
        metavar="STEPS",
        help="Maximum number of steps"
    )

    parser.add_argument(
        "-i", "--interactive",
        action="store_true",
        help="Print each step and wait for ENTER before the next one"
    )

    parser.add_argument(
        "-t", "--trace",
        action="store_true",
        help="Print the chain of rewrites"
    )

    parser.add_argument(
        "--strict",
        action="store_true",
        help="Treat reaching the step limit as an error"
    )

    parser.add_argument(
        "--base-only",
        action="store_true",
        help="Reject input words that use extension characters"
    )

    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log every step"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def create_alphabet(args: argparse.Namespace) -> Optional[Alphabet]:
    """
    Alphabet from --alphabet/--alphabet-extension, or None for the default.

    The reserved characters are those of --delimiter/--final-marker, so a
    default reserved character may be a member once it is overridden.
    """
    if args.alphabet is None:
        return None
    alphabet = Alphabet.parse(
        args.alphabet,
        delimiter=args.delimiter or DEFAULT_DELIMITER,
        final_marker=args.final_marker or DEFAULT_FINAL_MARKER,
        strict=True,
    )
    if args.alphabet_extension:
        alphabet = alphabet.extend_all(args.alphabet_extension)
    return alphabet


def create_scheme(args: argparse.Namespace) -> Scheme:
    builder = SchemeBuilder(create_alphabet(args))
    if args.delimiter is not None:
        builder.with_delimiter(args.delimiter)
    if args.final_marker is not None:
        builder.with_final_marker(args.final_marker)
    return builder.add_definitions(load_definitions(args.scheme)).build()


def run_full(scheme: Scheme, args: argparse.Namespace) -> int:
    """Apply the scheme to completion and print the result."""
    result, trace = scheme.apply(args.word, args.limit, trace=True, strict=args.strict,
                                 allow_extension=not args.base_only)

    if args.json:
        data = result.to_dict()
        if args.trace:
            data["trace"] = trace.to_dict()
        print(json.dumps(data, ensure_ascii=False, indent=2))
        return 0

    if args.trace:
        print(trace.format("chain"))
    if result.outcome is Outcome.STEP_LIMIT_REACHED:
        print(f"The step limit is reached after {result.steps} steps. "
              f"The current string is \"{result.word}\".")
    else:
        print(f"The algorithm is finished after taking {result.steps} steps. "
              f"The output string is \"{result.word}\".")
    return 0


def wait_for_user() -> bool:
    """Wait for ENTER; False if the user interrupted or closed the input."""
    try:
        input("Press ENTER to continue or hit Ctrl-C to exit.")
    except (EOFError, KeyboardInterrupt):
        print()
        return False
    return True


def run_interactive(scheme: Scheme, args: argparse.Namespace) -> int:
    """Step through the application, one rewrite per ENTER."""
    limit = args.limit or DEFAULT_INTERACTIVE_LIMIT
    session = scheme.steps(args.word, limit, allow_extension=not args.base_only)

    for step in session:
        print(f"Transformed the word \"{step.before}\" to the word \"{step.after}\" "
              f"by applying the substitution formula "
              f"\"{step.formula.to_definition(scheme.alphabet)}\".")
        if session.outcome is Outcome.RUNNING and not wait_for_user():
            print("Stopping due to the user's request.")
            return 0

    if session.outcome is Outcome.HALTED:
        print("No transformation was made, no formulas were applied.")
    if session.outcome is Outcome.STEP_LIMIT_REACHED:
        print(f"The step limit is reached after {session.steps_taken} steps. "
              f"The current string is \"{session.word}\".")
        if args.strict:
            raise StepLimitExceeded(limit, session.result())
        return 0

    print(f"The algorithm is finished after taking {session.steps_taken} steps. "
          f"The output string is \"{session.word}\".")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.alphabet_extension and args.alphabet is None:
        parser.error("--alphabet-extension can be used only together with --alphabet")
    if args.limit is None and not args.interactive:
        parser.error("one of the arguments -l/--limit -i/--interactive is required")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        scheme = create_scheme(args)
    except OSError as e:
        print(f"Error reading {args.scheme}: {e}", file=sys.stderr)
        return 1
    except MarkovError as e:
        print(f"Failed to create the algorithm scheme: {e}", file=sys.stderr)
        return 1

    try:
        if args.interactive:
            return run_interactive(scheme, args)
        return run_full(scheme, args)
    except MarkovError as e:
        print(f"Failed to apply the algorithm scheme to the input: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
