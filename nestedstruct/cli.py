import argparse
import json
import sys
from pathlib import Path

from pydantic import ValidationError

from nestedstruct import __version__
from nestedstruct.core.pipeline import NestedStructPipeline
from nestedstruct.exceptions import NestedStructError
from nestedstruct.utils.logging_utils import configure_logging, get_logger, setup_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nestedstruct",
        description="Expand a struct declaration with inline nested structs into flat declarations",
    )
    parser.add_argument("--version", action="version", version=f"nestedstruct {__version__}")

    parser.add_argument(
        "input",
        nargs="?",
        default="-",
        help="File containing the nested struct declaration ('-' or omitted reads stdin)",
    )
    parser.add_argument("--config", help="Path to a YAML configuration file")
    parser.add_argument(
        "--anonymous-nesting",
        choices=["enabled", "disabled"],
        help="Allow nested struct bodies without a type name",
    )
    parser.add_argument(
        "--marker-position",
        choices=["before", "after"],
        help="Where @nested(...) markers sit relative to a field's other attributes",
    )
    parser.add_argument("--indent", type=int, help="Spaces per indentation level")
    parser.add_argument("--output", "-o", help="Write generated code to this file")
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    parser.add_argument(
        "--verbose", action="store_true", help="Enable verbose logging (DEBUG level)"
    )
    return parser


def _config_overrides(args: argparse.Namespace) -> dict:
    overrides: dict = {}
    expansion = {}
    if args.anonymous_nesting:
        expansion["anonymous_nesting"] = args.anonymous_nesting
    if args.marker_position:
        expansion["nested_marker_position"] = args.marker_position
    if expansion:
        overrides["expansion"] = expansion
    if args.indent is not None:
        overrides["output"] = {"indent": args.indent}
    if args.verbose:
        overrides["logging"] = {"level": "DEBUG"}
    return overrides


def _read_source(input_arg: str) -> str:
    if input_arg == "-":
        return sys.stdin.read()
    return Path(input_arg).read_text(encoding="utf-8")


def main(argv: list[str] | None = None):
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logger(level="DEBUG" if args.verbose else "WARNING")

    try:
        pipeline = NestedStructPipeline(
            config_file=args.config,
            config_overrides=_config_overrides(args),
        )
    except (ValidationError, ValueError, FileNotFoundError) as e:
        if args.json:
            print(json.dumps({"status": "error", "error_type": "ConfigurationError", "error": str(e)}))
        else:
            logger.error(f"Invalid configuration: {e}")
        sys.exit(2)

    if args.config or args.verbose:
        configure_logging(pipeline.config.logging)

    source_name = "<stdin>" if args.input == "-" else args.input
    try:
        source = _read_source(args.input)
    except OSError as e:
        if args.json:
            print(json.dumps({"status": "error", "error_type": "FileError", "error": str(e)}))
        else:
            logger.error(f"Cannot read {source_name}: {e}")
        sys.exit(1)

    try:
        result = pipeline.expand(source)
    except NestedStructError as e:
        if args.json:
            print(
                json.dumps(
                    {
                        "status": "error",
                        "error_type": type(e).__name__,
                        "error": e.message,
                        "line": e.line,
                        "column": e.column,
                        "struct": e.struct_name,
                        "field": e.field_name,
                    }
                )
            )
        else:
            position = f"{e.line}:{e.column}" if e.line is not None else "?"
            print(f"{source_name}:{position}: {type(e).__name__}: {e.message}", file=sys.stderr)
        sys.exit(1)

    if args.output:
        output_path = Path(args.output)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(result.code, encoding="utf-8")
        logger.info(f"Wrote {len(result.declarations)} declaration(s) to {output_path}")

    if args.json:
        output = {"status": "success", **result.to_dict()}
        print(json.dumps(output, indent=2))
    elif not args.output:
        sys.stdout.write(result.code)


if __name__ == "__main__":
    main()
