"""CLI launcher for the snake relay server."""

from __future__ import annotations

import argparse
import logging
import sys

from snake_relay.config import RelayConfig

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-relay",
        description="Multiplayer snake relay server.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    def add_config_flags(p: argparse.ArgumentParser) -> None:
        p.add_argument(
            "--config", type=str, default=None,
            help="Path to a JSON config file (flags override its values).",
        )
        p.add_argument("--host", type=str, default=None)
        p.add_argument("--port", type=int, default=None)
        p.add_argument("--grid-width", type=int, default=None)
        p.add_argument("--grid-height", type=int, default=None)
        p.add_argument("--default-room", type=str, default=None)
        p.add_argument("--player-id-length", type=int, default=None)
        p.add_argument(
            "--food-avoids-snakes", action="store_true", default=None,
            help="Never respawn food on a snake segment.",
        )
        p.add_argument("--seed", type=int, default=None)
        p.add_argument(
            "--log-level", type=str, default=None,
            choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        )

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the relay server.")
    add_config_flags(serve_p)

    # --- config ---
    config_p = sub.add_parser(
        "config", help="Write the resolved configuration to a JSON file.",
    )
    add_config_flags(config_p)
    config_p.add_argument("output", help="Path for the JSON config.")

    return parser


def _resolve_config(args: argparse.Namespace) -> RelayConfig:
    config = RelayConfig.load(args.config) if args.config else RelayConfig()
    return config.replace(
        host=args.host,
        port=args.port,
        grid_width=args.grid_width,
        grid_height=args.grid_height,
        default_room_id=args.default_room,
        player_id_length=args.player_id_length,
        food_avoids_snakes=args.food_avoids_snakes,
        seed=args.seed,
        log_level=args.log_level,
    )


def _run_serve(config: RelayConfig, args: argparse.Namespace) -> int:
    import uvicorn

    from snake_relay.server.app import create_app

    logger.info("Starting snake relay on %s:%d", config.host, config.port)
    uvicorn.run(
        create_app(config),
        host=config.host,
        port=config.port,
        log_level=config.log_level.lower(),
    )
    return 0


def _run_config(config: RelayConfig, args: argparse.Namespace) -> int:
    config.save(args.output)
    print(f"Wrote config to {args.output}")  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-relay`` CLI."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        config = _resolve_config(args)
    except (OSError, ValueError, TypeError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    handlers = {
        "serve": _run_serve,
        "config": _run_config,
    }
    return handlers[args.command](config, args)


if __name__ == "__main__":
    sys.exit(main())
