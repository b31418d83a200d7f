"""Entry point: ``python -m skirmish``.

Supports two modes:
  - ``python -m skirmish``        → Launch the FastAPI inspection server
  - ``python -m skirmish cli``    → Headless autopilot session
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Side-scroller combat core")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI inspection server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--autopilot", action="store_true", help="Drive the player with the scripted controller")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless autopilot session")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--ticks", type=int, default=2000)
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from skirmish.api.app import create_app
    from skirmish.config import CombatConfig

    config = CombatConfig(world_seed=args.seed, log_level=args.log_level)
    app = create_app(config, autopilot=args.autopilot)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from skirmish.ai.autopilot import Autopilot
    from skirmish.config import CombatConfig
    from skirmish.engine.world_loop import WorldLoop
    from skirmish.utils.logging import setup_logging

    config = CombatConfig(world_seed=args.seed, max_ticks=args.ticks, log_level=args.log_level)
    setup_logging(config.log_level)

    loop = WorldLoop(config, autopilot=Autopilot())
    loop.run()

    player = loop.player
    kills = loop.spawner.kills
    logger.info(
        "Result: tick %d, %s, level %d, %d total XP, %d/%d HP, x=%.0f, %d enemies defeated",
        loop.tick,
        "defeated" if loop.game_over else "alive",
        player.level,
        player.total_experience,
        player.health.current,
        player.health.max,
        player.position.x,
        kills,
    )
    logger.info("Inventory: %s", loop.inventory.snapshot())


def main() -> None:
    parser = _build_parser()
    args = parser.parse_args()

    # Default to serve mode if no subcommand given
    if args.command is None or args.command == "serve":
        if args.command is None:
            args = parser.parse_args(["serve"])
        _run_server(args)
    elif args.command == "cli":
        _run_cli(args)


if __name__ == "__main__":
    main()
