"""Play headless sessions with random inputs through :class:`blockfall.FrameLoop`.

Run with::

    PYTHONPATH=src python examples/autoplay.py

Pass ``--help`` to see options for the number of sessions, the simulated
frame rate and how often a summary is logged.
"""

from __future__ import annotations

import argparse
import logging
import random
from collections import Counter

from blockfall import FrameLoop, Game, GameViewState, TickResult


LOGGER = logging.getLogger(__name__)

ACTIONS = (
    "move_left",
    "move_right",
    "rotate_clockwise",
    "rotate_counterclockwise",
    "soft_drop_step",
    "hard_drop",
    "hold",
)


class FakeClock:
    """Monotonic clock advanced by hand so sessions run faster than real time."""

    def __init__(self) -> None:
        self.current = 0.0

    def advance(self, delta: float) -> None:
        self.current += delta

    def __call__(self) -> float:
        return self.current


def run_session(
    *,
    frames: int,
    fps: float,
    action_chance: float,
    rng: random.Random,
    events: Counter,
) -> GameViewState:
    """Run one session until game over or ``frames`` frames have elapsed."""

    clock = FakeClock()
    game = Game(rng=random.Random(rng.random()))

    def listener(result: TickResult) -> None:
        for event in result.events:
            events[event.kind] += 1

    loop = FrameLoop(game, listener=listener, clock=clock)
    loop.start()
    state = game.get_state()
    for _ in range(frames):
        if rng.random() < action_chance:
            getattr(loop, rng.choice(ACTIONS))()
        if state.inventory and rng.random() < action_chance:
            loop.use_item(0)
        clock.advance(1.0 / fps)
        result = loop.frame()
        if result is None:
            continue
        state = result.state
        if state.is_game_over:
            break
    loop.stop()
    return state


def _format_summary(state: GameViewState, events: Counter) -> str:
    stats = state.stats
    parts = [
        f"score={stats.score}",
        f"lines={stats.lines_cleared}",
        f"level={stats.level}",
        f"max_combo={stats.max_combo}",
    ]
    parts.extend(f"{kind}={count}" for kind, count in sorted(events.items()))
    return ", ".join(parts)


def log_summary(state: GameViewState, events: Counter, *, index: int) -> str:
    message = _format_summary(state, events)
    LOGGER.info("Session %d: %s", index, message)
    return message


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--sessions", type=int, default=1, help="How many sessions to play.")
    parser.add_argument("--frames", type=int, default=36000, help="Frame cap per session.")
    parser.add_argument("--fps", type=float, default=60.0, help="Simulated frames per second.")
    parser.add_argument(
        "--action-chance",
        type=float,
        default=0.1,
        help="Probability of issuing a random input on each frame.",
    )
    parser.add_argument("--seed", type=int, default=None, help="Seed for reproducible runs.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")

    rng = random.Random(args.seed)
    for session_idx in range(1, args.sessions + 1):
        events: Counter = Counter()
        state = run_session(
            frames=args.frames,
            fps=args.fps,
            action_chance=args.action_chance,
            rng=rng,
            events=events,
        )
        log_summary(state, events, index=session_idx)


if __name__ == "__main__":
    main()
