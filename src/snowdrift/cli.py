"""Command line entry point: run a configured simulation and report accumulation."""

from __future__ import annotations

import argparse
import logging
import sys

from pydantic import ValidationError

from .config import load_params
from .registry import list_backends
from .run import run


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snowdrift",
        description="Simulate windborne snow over terrain and report ground accumulation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
    snowdrift params.json
    snowdrift params.json --backend numba --steps 5000 --csv accumulation.csv
        """,
    )
    parser.add_argument("config", help="JSON parameter file")
    parser.add_argument(
        "--backend",
        default="cpu",
        help=f"execution backend (default: cpu; available: {', '.join(list_backends())})",
    )
    parser.add_argument("--steps", type=int, default=None, help="number of steps (default: from config)")
    parser.add_argument("--csv", default=None, help="write recorded accumulation to this CSV file")
    parser.add_argument("--progress", action="store_true", help="show a progress bar")
    parser.add_argument("--verbose", action="store_true", help="enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        params = load_params(args.config)
    except (FileNotFoundError, ValidationError) as e:
        print(f"error: failed to load {args.config}: {e}", file=sys.stderr)
        return 1

    if args.steps is not None and args.steps < 0:
        print(f"error: --steps must be >= 0, got {args.steps}", file=sys.stderr)
        return 1

    if args.backend not in list_backends():
        print(
            f"error: unknown backend '{args.backend}'; available: {', '.join(list_backends())}",
            file=sys.stderr,
        )
        return 1

    result = run(params, backend=args.backend, n_steps=args.steps, progress=args.progress)

    if args.csv is not None:
        result.to_dataframe().to_csv(args.csv)

    print("accumulated snow:")
    for mass in result.final_accumulation:
        print(f"{mass:g}")
    print()
    print(f"Finished simulation steps: grid({params.nx}x{params.ny})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
