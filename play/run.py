"""
Launch the cheese shooter in an arcade window
"""

import argparse
import logging
import random

import arcade

from game.parm import GameSession, Leaderboard, RemoteScoreClient, ScoreBoard
from game.parm.window import ArcadeScheduler, ShooterWindow
from play.configs.shooter_config import SESSION_CONFIG, WINDOW_CONFIG, LEADERBOARD_CONFIG


def build_scoreboard(path: str, submit: bool) -> ScoreBoard:
    leaderboard = Leaderboard(path=path, limit=LEADERBOARD_CONFIG["limit"])
    remote = None
    if submit:
        remote = RemoteScoreClient(
            url=LEADERBOARD_CONFIG["submit_url"],
            timeout=LEADERBOARD_CONFIG["submit_timeout"],
        )
    return ScoreBoard(leaderboard, remote=remote)


def play(
    width: int = WINDOW_CONFIG["width"],
    height: int = WINDOW_CONFIG["height"],
    leaderboard_path: str = LEADERBOARD_CONFIG["path"],
    submit: bool = True,
    assets_dir=WINDOW_CONFIG["assets_dir"],
    seed=None,
):
    """Open the window and run until it is closed"""
    scheduler = ArcadeScheduler()
    session = GameSession(
        width=width,
        height=height,
        scheduler=scheduler,
        scoreboard=build_scoreboard(leaderboard_path, submit),
        rng=random.Random(seed),
        **SESSION_CONFIG,
    )
    window = ShooterWindow(
        session,
        title=WINDOW_CONFIG["title"],
        assets_dir=assets_dir,
        music_volume=WINDOW_CONFIG["music_volume"],
    )
    window.set_update_rate(WINDOW_CONFIG["update_rate"])
    arcade.run()
    scheduler.cancel_all()
    return session


def main():
    parser = argparse.ArgumentParser(description="Play the $PARM cheese shooter")
    parser.add_argument(
        "--width",
        type=int,
        default=WINDOW_CONFIG["width"],
        help=f"Window width (default: {WINDOW_CONFIG['width']})",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=WINDOW_CONFIG["height"],
        help=f"Window height (default: {WINDOW_CONFIG['height']})",
    )
    parser.add_argument(
        "--leaderboard",
        type=str,
        default=LEADERBOARD_CONFIG["path"],
        help="Path of the local leaderboard JSON file",
    )
    parser.add_argument(
        "--no-submit",
        action="store_true",
        help="Do not send final scores to the remote collector",
    )
    parser.add_argument(
        "--assets",
        type=str,
        default=WINDOW_CONFIG["assets_dir"],
        help="Directory with Matemasie.ttf, images, sounds and game2.wav music (optional)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for enemy spawning",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log per-hit events",
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    play(
        width=args.width,
        height=args.height,
        leaderboard_path=args.leaderboard,
        submit=not args.no_submit,
        assets_dir=args.assets,
        seed=args.seed,
    )


if __name__ == "__main__":
    main()
