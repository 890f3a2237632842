"""Entry point: ``python -m neuromaze``.

Supports two modes:
  - ``python -m neuromaze``          → Launch FastAPI server for a live client
  - ``python -m neuromaze cli``      → Headless run with the autopilot playing
"""

from __future__ import annotations

import argparse
import logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="NeuroMaze adaptive maze-chase engine")
    sub = parser.add_subparsers(dest="command")

    # --- Server mode (default) ---
    srv = sub.add_parser("serve", help="Start the FastAPI game server (default)")
    srv.add_argument("--host", type=str, default="127.0.0.1")
    srv.add_argument("--port", type=int, default=8000)
    srv.add_argument("--seed", type=int, default=42)
    srv.add_argument("--size", type=int, default=15)
    srv.add_argument("--warning-ticks", type=int, default=0)
    srv.add_argument("--highscore", type=str, default="highscore.json")
    srv.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    srv.add_argument("--log-file", type=str, default=None)

    # --- Headless CLI mode ---
    cli = sub.add_parser("cli", help="Run a headless game with the autopilot")
    cli.add_argument("--seed", type=int, default=42)
    cli.add_argument("--size", type=int, default=15)
    cli.add_argument("--ticks", type=int, default=2000)
    cli.add_argument("--autopilot-interval", type=int, default=4)
    cli.add_argument("--warning-ticks", type=int, default=0)
    cli.add_argument("--replay", type=str, default="replay.json")
    cli.add_argument("--highscore", type=str, default="highscore.json")
    cli.add_argument("--log-level", type=str, default="INFO", choices=["DEBUG", "INFO", "WARNING"])
    cli.add_argument("--log-file", type=str, default=None)

    return parser


def _run_server(args: argparse.Namespace) -> None:
    import uvicorn

    from neuromaze.api.app import create_app
    from neuromaze.config import GameConfig

    config = GameConfig(
        seed=args.seed,
        grid_size=args.size,
        wall_warning_ticks=args.warning_ticks,
        highscore_file=args.highscore,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    app = create_app(config)
    uvicorn.run(app, host=args.host, port=args.port, log_level=args.log_level.lower())


def _run_cli(args: argparse.Namespace) -> None:
    from neuromaze.ai.autopilot import Autopilot
    from neuromaze.config import GameConfig
    from neuromaze.engine.game_loop import GameLoop
    from neuromaze.systems.rng import DeterministicRNG
    from neuromaze.utils.highscore import HighScoreStore
    from neuromaze.utils.logging import setup_logging
    from neuromaze.utils.replay import ReplayRecorder

    config = GameConfig(
        seed=args.seed,
        grid_size=args.size,
        max_ticks=args.ticks,
        wall_warning_ticks=args.warning_ticks,
        replay_file=args.replay,
        highscore_file=args.highscore,
        log_level=args.log_level,
        log_file=args.log_file,
    )
    setup_logging(config.log_level, config.log_file)

    loop = GameLoop(config, DeterministicRNG(config.seed))
    autopilot = Autopilot(args.autopilot_interval)
    recorder = ReplayRecorder(config.replay_file, config.seed)
    loop.run(controller=autopilot, recorder=recorder)

    state = loop.state
    store = HighScoreStore(config.highscore_file)
    if store.record(state.player.score):
        logger.info("New high score: %d", state.player.score)
    logger.info(
        "Done. Reached level %d with score %d (%d moves). Replay written to %s",
        state.level, state.player.score, autopilot.moves_made, config.replay_file,
    )


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
