"""Command line tools for Tick Snake."""

from __future__ import annotations

import argparse
import json
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tick-snake",
        description="Tick Snake headless simulation, benchmark, and config tools.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- simulate ---
    sim_p = sub.add_parser(
        "simulate", help="Play one game with a random pilot.",
    )
    sim_p.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON config file (flags override its values).",
    )
    sim_p.add_argument("--grid-width", type=int, default=None)
    sim_p.add_argument("--grid-height", type=int, default=None)
    sim_p.add_argument("--initial-length", type=int, default=None)
    sim_p.add_argument("--base-interval", type=int, default=None)
    sim_p.add_argument("--seed", type=int, default=None)
    sim_p.add_argument("--max-ticks", type=int, default=10_000)
    sim_p.add_argument("--turn-prob", type=float, default=0.1)

    # --- benchmark ---
    bench_p = sub.add_parser(
        "benchmark", help="Measure simulation throughput.",
    )
    bench_p.add_argument("--num-games", type=int, default=100)
    bench_p.add_argument("--grid-width", type=int, default=20)
    bench_p.add_argument("--grid-height", type=int, default=20)
    bench_p.add_argument("--max-ticks", type=int, default=2_000)
    bench_p.add_argument("--seed", type=int, default=42)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write a session config file.",
    )
    config_p.add_argument("output", help="Path for the JSON config.")
    config_p.add_argument("--grid-width", type=int, default=None)
    config_p.add_argument("--grid-height", type=int, default=None)
    config_p.add_argument("--initial-length", type=int, default=None)
    config_p.add_argument("--base-interval", type=int, default=None)
    config_p.add_argument("--seed", type=int, default=None)

    return parser


_FLAG_MAP = {
    "grid_width": "grid_width",
    "grid_height": "grid_height",
    "initial_length": "initial_length",
    "base_interval": "base_interval",
    "seed": "seed",
}


def _config_from_args(args: argparse.Namespace):
    from tick_snake.config import SessionConfig

    path = getattr(args, "config", None)
    try:
        config = SessionConfig.load(path) if path else SessionConfig()
    except OSError as exc:
        raise ValueError(f"Cannot read config {path}: {exc.strerror}") from exc

    overrides: dict = {}
    for cli_name, cfg_name in _FLAG_MAP.items():
        val = getattr(args, cli_name, None)
        if val is not None:
            overrides[cfg_name] = val
    if overrides:
        config = config.replace(**overrides)
    return config


def _run_simulate(args: argparse.Namespace) -> int:
    from tick_snake.benchmark import run_headless

    config = _config_from_args(args)
    snap = run_headless(
        config, max_ticks=args.max_ticks, turn_prob=args.turn_prob,
    )
    summary = {
        "state": snap.state.value,
        "score": snap.score,
        "ticks": snap.tick,
        "length": snap.length,
    }
    print(json.dumps(summary))  # noqa: T201
    return 0


def _run_benchmark(args: argparse.Namespace) -> int:
    from tick_snake.benchmark import benchmark_throughput

    result = benchmark_throughput(
        num_games=args.num_games,
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        max_ticks=args.max_ticks,
        seed=args.seed,
    )
    print(result.summary())  # noqa: T201
    return 0


def _run_config(args: argparse.Namespace) -> int:
    _config_from_args(args).save(args.output)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``tick-snake`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    handlers = {
        "simulate": _run_simulate,
        "benchmark": _run_benchmark,
        "config": _run_config,
    }
    try:
        return handlers[args.command](args)
    except ValueError as exc:
        logger.error("Invalid configuration: %s", exc)
        return 2


if __name__ == "__main__":
    sys.exit(main())
