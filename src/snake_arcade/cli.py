"""Command-line entry point for Snake Arcade."""

from __future__ import annotations

import argparse
import logging
import sys

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="snake-arcade",
        description="Snake Arcade game server and tools.",
    )
    parser.add_argument(
        "--config", type=str, default=None,
        help="Path to a JSON game config file.",
    )
    sub = parser.add_subparsers(dest="command", help="Available commands.")

    # --- serve ---
    serve_p = sub.add_parser("serve", help="Run the HTTP/WebSocket server.")
    serve_p.add_argument("--host", type=str, default="127.0.0.1")
    serve_p.add_argument("--port", type=int, default=8000)

    # --- demo ---
    demo_p = sub.add_parser(
        "demo", help="Play a headless game and print text frames.",
    )
    demo_p.add_argument("--grid-size", type=int, default=None)
    demo_p.add_argument(
        "--max-ticks", type=int, default=200,
        help="Stop after this many ticks if the snake is still alive.",
    )
    demo_p.add_argument(
        "--quiet", action="store_true",
        help="Only print the final frame.",
    )

    # --- high-score ---
    sub.add_parser("high-score", help="Show the stored high score.")

    return parser


def _load_config(args: argparse.Namespace):
    from snake_arcade.config import GameConfig

    return GameConfig.load(args.config) if args.config else GameConfig()


def _run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from snake_arcade.server.app import create_app

    app = create_app(args.game_config)
    uvicorn.run(app, host=args.host, port=args.port)
    return 0


def _run_demo(args: argparse.Namespace) -> int:
    from snake_arcade.clock import ManualScheduler
    from snake_arcade.render import TextRenderer, render_text
    from snake_arcade.session import GameSession, SessionState
    from snake_arcade.storage import InMemoryHighScoreStore

    config = args.game_config
    scheduler = ManualScheduler()
    session = GameSession(
        scheduler,
        config=config,
        storage=InMemoryHighScoreStore(),
        renderer=None if args.quiet else TextRenderer(),
    )
    if args.grid_size is not None:
        session.request_grid_size(args.grid_size)
    session.start()

    ticks = 0
    while session.state == SessionState.RUNNING and ticks < args.max_ticks:
        scheduler.advance(session.clock.interval_ms)
        ticks += 1
    session.end()

    if args.quiet:
        print(render_text(session.snapshot()))  # noqa: T201
    logger.info("Demo finished after %d ticks with score %d.", ticks, session.score)
    return 0


def _run_high_score(args: argparse.Namespace) -> int:
    from snake_arcade.storage import JsonHighScoreStore

    config = args.game_config
    if not config.high_score_path:
        print("No high score file configured.")  # noqa: T201
        return 1
    store = JsonHighScoreStore(config.high_score_path)
    print(store.load_high_score())  # noqa: T201
    return 0


def main(argv: list[str] | None = None) -> int:
    """Entry point for the ``snake-arcade`` CLI."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        args.game_config = _load_config(args)
    except (OSError, ValueError) as exc:
        logger.error("Could not load config %s: %s", args.config, exc)
        return 2

    handlers = {
        "serve": _run_serve,
        "demo": _run_demo,
        "high-score": _run_high_score,
    }
    return handlers[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
