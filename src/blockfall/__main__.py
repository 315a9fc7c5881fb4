"""Simple ASCII demo for the game engine.

Run with: `python -m blockfall`

This module prints a single frame composed of the visible board plus the
active piece, useful as a minimal smoke test to ensure renderers see more
than a blank grid.
"""

from __future__ import annotations

from . import Game, render_grid


def _print_grid(grid: list[list[int]]) -> None:
    for row in grid:
        print("".join("#" if cell else "." for cell in row))


def main() -> None:
    game = Game()
    game.start()
    # A few frames of gravity so the piece is inside the visible rows.
    for _ in range(90):
        result = game.tick(1 / 60)
    grid = render_grid(result.state, visible_only=True)
    _print_grid(grid)
    stats = result.state.stats
    print(f"score={stats.score} level={stats.level} next={[t.value for t in result.state.next_queue]}")


if __name__ == "__main__":
    main()
