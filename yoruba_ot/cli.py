"""Command-line interface for the tableau pipeline."""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from .config import Config
from .pipeline import TableauPipeline
from .segments import parse


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv=None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Optimality-Theory evaluation of Yoruba syllabification",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Using a config file
  yoruba-ot evaluate --config config.yaml

  # Direct arguments
  yoruba-ot evaluate --form owoktwiowo --output output/tableau.csv

  # Forms from a file, at most two deletions per competitor
  yoruba-ot evaluate --input forms.txt --max-deletions 2 --format json

  # Show the syllable parse of some forms
  yoruba-ot syllabify owoktwiowo test
        """,
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    evaluate_parser = subparsers.add_parser("evaluate", help="Write violation tableaux")
    setup_evaluate_parser(evaluate_parser)

    syllabify_parser = subparsers.add_parser("syllabify", help="Print syllable parses")
    syllabify_parser.add_argument("forms", nargs="+", help="Forms to syllabify")
    syllabify_parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    # If no command specified, treat as evaluate command
    argv = sys.argv[1:] if argv is None else list(argv)
    if not argv or argv[0] not in ("evaluate", "syllabify", "-h", "--help"):
        argv = ["evaluate"] + argv

    return parser.parse_args(argv)


def setup_evaluate_parser(parser: argparse.ArgumentParser) -> None:
    """Setup arguments for evaluate command."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )

    # Input/Output
    parser.add_argument(
        "--input",
        type=Path,
        help="File of underlying forms (.txt, .csv or .json)",
    )
    parser.add_argument(
        "--form",
        action="append",
        dest="forms",
        help="Underlying form to evaluate (repeatable)",
    )
    parser.add_argument(
        "--output",
        type=Path,
        help="Path of the tableau file",
    )
    parser.add_argument(
        "--format",
        choices=["csv", "parquet", "json"],
        help="Tableau format (default: csv)",
    )

    # Generation options
    parser.add_argument(
        "--max-deletions",
        type=int,
        help="Maximum segments deleted per competitor (default: no limit)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Seed for candidate random streams (default: 7777777)",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    # Start with config file if provided
    if getattr(args, "config", None):
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    # Override with command-line arguments
    if getattr(args, "input", None):
        config.input.input_file = args.input
    if getattr(args, "forms", None):
        config.input.forms = list(config.input.forms) + args.forms
    if getattr(args, "output", None):
        config.output.output_path = args.output
    if getattr(args, "format", None):
        config.output.format = args.format
    if getattr(args, "max_deletions", None) is not None:
        config.generation.max_deletions = args.max_deletions
    if getattr(args, "seed", None) is not None:
        config.generation.seed = args.seed

    # Re-validate the overridden values
    return Config.model_validate(config.model_dump())


def handle_syllabify(args: argparse.Namespace) -> int:
    """Handle syllabify command."""
    for text in args.forms:
        candidate = parse(text)
        print(f"{text}\t{candidate.syllable_parse}")
    return 0


def handle_evaluate(args: argparse.Namespace) -> int:
    """Handle evaluate command."""
    try:
        config = build_config(args)
    except (ValueError, ValidationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if not config.input.forms and not config.input.input_file:
        print("Error: Forms are required (use --form, --input or --config)", file=sys.stderr)
        return 1

    try:
        pipeline = TableauPipeline(config)
        row_count = pipeline.run()
        print(f"\nWrote {row_count} rows to {config.output.output_path}")
        return 0
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Evaluation failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


def main(argv=None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(getattr(args, "verbose", False))

    if args.command == "syllabify":
        return handle_syllabify(args)
    return handle_evaluate(args)


if __name__ == "__main__":
    sys.exit(main())
