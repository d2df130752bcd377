# src/projctx/cli.py
import sys
import argparse
import json
import logging
import os
from pathlib import Path

# Module imports
from projctx.config import DEFAULT_IGNORE_FILE, DEFAULT_MAX_DEPTH, DEFAULT_MAX_FILES
from projctx.core.ignore import load_ignore_patterns
from projctx.core.patterns import parse_pattern
from projctx.core.render import context_metadata, enhance_prompt, render, summarize
from projctx.engine import ContextEngine
from projctx.errors import ContextError
from projctx.models import SelectionPolicy


def create_arg_parser():
    parser = argparse.ArgumentParser(
        description="Scan a project and build an LLM-ready context block from its most relevant code files."
    )
    parser.add_argument("root_dir", type=str, nargs="?", default=os.getcwd(), help="Project root directory")
    parser.add_argument("-n", "--max-files", type=int, default=DEFAULT_MAX_FILES, help="Maximum number of files to include")
    parser.add_argument("-d", "--max-depth", type=int, default=DEFAULT_MAX_DEPTH, help="Maximum directory depth to select from")
    parser.add_argument(
        "-i", "--include",
        action="append", default=[], metavar="PATTERN",
        help="Only include paths containing PATTERN ('re:<expr>' for a regex). Repeatable.",
    )
    parser.add_argument(
        "-x", "--exclude",
        action="append", default=[], metavar="PATTERN",
        help="Exclude paths containing PATTERN ('re:<expr>' for a regex). Repeatable.",
    )
    parser.add_argument(
        "--ignore-file",
        type=str, default=None,
        help=f"Extra gitignore-style prune rules (default: {DEFAULT_IGNORE_FILE} in the root, if present)",
    )
    parser.add_argument("-p", "--prompt", type=str, default=None, help="Append the context to this prompt as a USER QUERY")
    parser.add_argument("--json", action="store_true", help="Write a JSON summary with content previews instead of the text block")
    parser.add_argument("-o", "--output", type=str, default=None, help="Output file (default: stdout)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def build_policy(args) -> SelectionPolicy:
    return SelectionPolicy(
        max_files=args.max_files,
        max_depth=args.max_depth,
        include_patterns=tuple(parse_pattern(p) for p in args.include),
        exclude_patterns=tuple(parse_pattern(p) for p in args.exclude),
    )


def main(argv=None):
    parser = create_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        # 1. Setup
        root_dir = Path(args.root_dir).resolve()
        try:
            policy = build_policy(args)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)

        ignore_file = Path(args.ignore_file) if args.ignore_file else root_dir / DEFAULT_IGNORE_FILE
        extra_ignore = load_ignore_patterns(ignore_file)

        # 2. Scan & assemble
        engine = ContextEngine(extra_ignore=extra_ignore)
        try:
            engine.scan_project(root_dir)
        except ContextError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        context = engine.generate(policy, root_dir)

        # 3. Output generation
        if args.json:
            output = json.dumps(summarize(context), indent=2, ensure_ascii=False) + "\n"
        elif args.prompt is not None:
            output = enhance_prompt(args.prompt, context)
        else:
            output = render(context)

        if args.output is None:
            sys.stdout.write(output)
            return

        meta = context_metadata(context)
        try:
            with open(args.output, "w", encoding="utf-8") as f:
                f.write(output)
        except IOError as e:
            print(f"Error writing file: {e}", file=sys.stderr)
            sys.exit(1)

        print(f"--- projctx ---")
        print(f"Scanned: {root_dir}")
        print(f"Files:   {meta['filesIncluded']}")
        print(f"Tokens:  {meta['tokens']}")
        print(f"\nSuccess! Context written to: {args.output}")

    except KeyboardInterrupt:
        print("\nCancelled.")
        sys.exit(1)


if __name__ == "__main__":
    main()
