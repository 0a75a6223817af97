"""Command-line interface for the EDI envelope encoder.

WHY: Integration scripts and people debugging a trading-partner setup
need a quick way to turn an interchange XML file into EDI text with a
given set of separators, without writing Python.

HOW: Uses argparse to accept the XML input path, the dialect, separator
overrides (individual flags and/or a JSON override file), and an output
path. Parses the XML, builds the separator context, runs the encoder and
writes the rendered interchange. Status messages go to stderr; the EDI
goes to stdout or --output.

RULES:
- Positional argument: input XML file path
- --separators FILE.json is validated against the override schema;
  individual flags (--component, --data, --release, --terminator) win
  over values from the file
- Configuration, lookup, format and XML errors exit with status 1
- Status output goes to stderr (not stdout)
- --verbose enables DEBUG logging (skipped group boundaries, aborts)
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from xml.etree import ElementTree

from edi_envelope.config import DEFAULT_DIALECT, SEGMENT_NEWLINE
from edi_envelope.core.separators import DIALECTS, SeparatorOverride, build_separator_context
from edi_envelope.encoder import encode_with_context, has_separator_advice, render_interchange
from edi_envelope.errors import ConfigurationError, EnvelopeError


def _status(msg: str) -> None:
    """Print a status message to stderr.

    WHY: Status output must not pollute stdout so the CLI can be piped.
    """
    print(msg, file=sys.stderr, flush=True)


def _load_override(args: argparse.Namespace) -> SeparatorOverride:
    """Combine the override file and the individual separator flags.

    RULES:
    - The file (if any) is parsed as JSON and schema-validated
    - Flags set on the command line replace file values
    - Flag values go through the same schema as file values
    """
    override = SeparatorOverride()

    if args.separators:
        path = Path(args.separators)
        try:
            document = json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            raise ConfigurationError(
                "Separator file {} is not valid JSON: {}".format(path, exc)
            ) from exc
        except OSError as exc:
            raise ConfigurationError(
                "Separator file {} cannot be read: {}".format(path, exc.strerror or exc)
            ) from exc
        override = SeparatorOverride.from_dict(document)
        _status("  Separators: {} (file)".format(path))

    flags = {
        name: getattr(args, name)
        for name in ("component", "data", "release", "terminator")
        if getattr(args, name) is not None
    }
    if flags:
        override = override.merged(SeparatorOverride.from_dict(flags))
        _status("  Separators: {} (flags)".format(", ".join(sorted(flags))))

    return override


def _run(args: argparse.Namespace) -> int:
    """Execute the encode and return the process exit status."""
    input_path = Path(args.input_file).resolve()

    if not input_path.is_file():
        print("Error: File not found: {}".format(input_path), file=sys.stderr)
        return 1

    try:
        override = _load_override(args)
        context = build_separator_context(dialect=args.dialect, override=override)
        _status("Dialect: {} ({} separators)".format(
            context.dialect, "default" if context.is_default else "custom",
        ))

        tree = ElementTree.parse(str(input_path)).getroot()
        segments = encode_with_context(tree, context)
    except ElementTree.ParseError as e:
        print("Error: Invalid XML in {}: {}".format(input_path, e), file=sys.stderr)
        return 1
    except EnvelopeError as e:
        print("Error: {}".format(e), file=sys.stderr)
        return 1

    edi = render_interchange(segments, context, newline=args.newline)

    if args.output:
        output_path = Path(args.output)
        output_path.write_text(edi, encoding="utf-8")
        _status("Saved: {}".format(output_path))
    else:
        sys.stdout.write(edi)
        sys.stdout.flush()

    count = len(segments) - (1 if has_separator_advice(context) else 0)
    _status("Done! {} segment(s) written".format(count))
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse parser for the CLI.

    WHY: Separating parser construction from main() makes the CLI
    testable: tests can inspect the parser without running an encode.
    """
    parser = argparse.ArgumentParser(
        prog="edi_envelope",
        description="Encode an interchange XML tree into EDI text "
                    "(EDIFACT or X12 envelope).",
    )

    parser.add_argument(
        "input_file",
        help="Path to the interchange XML file.",
    )

    parser.add_argument(
        "--dialect",
        default=None,
        choices=sorted(DIALECTS),
        help="Interchange dialect (default: the override file's dialect, "
             "else {}).".format(DEFAULT_DIALECT),
    )

    parser.add_argument("--component", default=None, help="Component data element separator.")
    parser.add_argument("--data", default=None, help="Data element separator.")
    parser.add_argument(
        "--release",
        default=None,
        help="Release indicator (X12: repetition separator).",
    )
    parser.add_argument("--terminator", default=None, help="Segment terminator.")

    parser.add_argument(
        "--separators",
        default=None,
        help="Path to a JSON separator override file, e.g. "
             "{\"component\": \":\", \"data\": \";\"}.",
    )

    parser.add_argument(
        "--newline",
        action=argparse.BooleanOptionalAction,
        default=SEGMENT_NEWLINE,
        help="Write a line break after each segment (default: %(default)s).",
    )

    parser.add_argument(
        "--output",
        default=None,
        help="Write the EDI to this file instead of stdout.",
    )

    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging.",
    )

    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the CLI.

    RULES:
    - argv=None means use sys.argv (normal CLI invocation)
    - Explicit argv is for testing
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    sys.exit(_run(args))


if __name__ == "__main__":
    main()
