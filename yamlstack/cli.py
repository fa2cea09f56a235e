# Copyright 2025 Roger Cibrian
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Command-line interface for yamlstack.

Commands:

    merge: Merge YAML documents in order and print the result

Example:
    Merge a base file with an override:
        ```bash
        $ yamlstack merge config/base.yaml config/prod.yaml
        ```

    Write the result to a file and show what was merged:
        ```bash
        $ yamlstack merge base.yaml prod.yaml -o merged.yaml --verbose
        ```

    Fail instead of skipping unreadable or malformed documents:
        ```bash
        $ yamlstack merge base.yaml prod.yaml --strict
        ```

Exit Codes:

- 0: Success
- 1: Error (strict-mode read/parse failure, or output could not be written)

Note:
    Merged YAML goes to stdout; progress and diagnostics go to stderr so the
    output can be piped.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys

from yamlstack import __version__
from yamlstack.codec import dump_document
from yamlstack.exceptions import ParseError, ReadError, YamlStackError
from yamlstack.logging import get_logger, set_global_logger
from yamlstack.merger import MultipleConfigurationMerger


def _installed_version() -> str:
    try:
        return version("yamlstack")
    except PackageNotFoundError:
        return __version__


def cmd_merge(args: argparse.Namespace) -> int:
    """Handler for 'yamlstack merge' command.

    Args:
        args: Parsed command-line arguments containing the paths, output
            file, strict flag and verbosity flags.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = get_logger(verbose=args.verbose, debug=args.debug, stream=sys.stderr)
    set_global_logger(logger)

    merger = MultipleConfigurationMerger(logger=logger, strict=args.strict)

    try:
        result = merger.fold(args.paths)
    except (ReadError, ParseError) as err:
        print(f"Error: {err}", file=sys.stderr)
        if args.verbose or args.debug:
            import traceback

            traceback.print_exc()
        return 1

    text = dump_document(result.config)

    if args.output:
        output = Path(args.output)
        try:
            output.parent.mkdir(parents=True, exist_ok=True)
            output.write_text(text, encoding="utf-8")
        except OSError as err:
            print(f"Error: could not write {output}: {err}", file=sys.stderr)
            return 1
    else:
        sys.stdout.write(text)

    if args.verbose or args.debug:
        err = sys.stderr
        print("=" * 70, file=err)
        print("MERGE RESULTS", file=err)
        print("=" * 70, file=err)
        print(f"Merged:   {len(result.merged)}", file=err)
        for path in result.merged:
            print(f"  - {path}", file=err)
        print(f"Empty:    {len(result.empty)}", file=err)
        for path in result.empty:
            print(f"  - {path}", file=err)
        print(f"Skipped:  {len(result.skipped)}", file=err)
        for skipped in result.skipped:
            print(f"  - {skipped.path}: {skipped.reason}", file=err)
        if args.output:
            print(f"Output:   {args.output}", file=err)
        print("=" * 70, file=err)

    return 0


def build_parser() -> argparse.ArgumentParser:
    """Builds the argument parser for the yamlstack CLI."""
    parser = argparse.ArgumentParser(
        prog="yamlstack",
        description="yamlstack - merge layered YAML configuration files",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"yamlstack {_installed_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'merge' command
    parser_merge = subparsers.add_parser(
        "merge",
        help="Merge YAML documents in order (later files win)",
        description="Deep-merge YAML documents left to right and print the merged YAML.",
    )
    parser_merge.add_argument(
        "paths",
        nargs="+",
        help="Paths or http(s) URLs of YAML documents, base first",
    )
    parser_merge.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write merged YAML to this file instead of stdout",
    )
    parser_merge.add_argument(
        "--strict",
        action="store_true",
        help="Fail on unreadable or malformed documents instead of skipping them",
    )
    parser_merge.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show which documents were merged or skipped",
    )
    parser_merge.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_merge.set_defaults(func=cmd_merge)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the yamlstack CLI.

    This function is registered as the 'yamlstack' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        exit_code = args.func(args)
    except YamlStackError as err:
        print(f"Error: {err}", file=sys.stderr)
        exit_code = 1

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
