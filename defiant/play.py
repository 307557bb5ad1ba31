"""
Command-line entry point

    python -m defiant.play                 # open the game window
    python -m defiant.play --random 3000   # headless random-action episode
"""

import argparse
import logging

from .configs.defiant_config import ENV_CONFIG, SESSION_CONFIG, WINDOW_CONFIG


def main(argv=None):
    parser = argparse.ArgumentParser(description="USS Defiant - arcade space combat around Deep Space Nine")
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for asteroids, spawns and effects"
    )
    parser.add_argument(
        "--random",
        type=int,
        default=None,
        metavar="STEPS",
        help="Run a headless episode of random actions for at most STEPS ticks instead of opening a window"
    )
    parser.add_argument(
        "--render",
        action="store_true",
        help="Draw the random episode in a window"
    )
    parser.add_argument(
        "--width",
        type=int,
        default=WINDOW_CONFIG["width"],
    )
    parser.add_argument(
        "--height",
        type=int,
        default=WINDOW_CONFIG["height"],
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level, format="%(asctime)s %(name)s %(levelname)s: %(message)s")

    if args.random is not None:
        from .defiant_env import run_random_episode
        run_random_episode(render=args.render, seed=args.seed, max_steps=min(args.random, ENV_CONFIG["max_steps"]))
        return

    from .session import GameSession
    from .window import run_window

    window_kwargs = dict(WINDOW_CONFIG, width=args.width, height=args.height)
    run_window(GameSession(seed=args.seed, **SESSION_CONFIG), **window_kwargs)


if __name__ == "__main__":
    main()
