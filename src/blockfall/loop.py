"""Frame driver that feeds wall-clock time into :class:`~blockfall.game.Game`.

The loop mirrors a browser ``requestAnimationFrame`` callback: every call to
:meth:`FrameLoop.frame` measures the time since the previous frame, ticks the
game with that delta and hands the result to a listener (typically a
renderer).  Player input is forwarded straight to the game.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .game import Game, TickResult
from .tetromino import RotationDirection


LOGGER = logging.getLogger(__name__)

FrameListener = Callable[[TickResult], None]


@dataclass
class FrameLoop:
    game: Game
    listener: Optional[FrameListener] = None
    clock: Callable[[], float] = time.perf_counter
    running: bool = False
    last_ts: float = 0.0

    def start(self) -> None:
        if self.running:
            LOGGER.info("Already running")
            return
        self.game.start()
        self.running = True
        self.last_ts = self.clock()
        LOGGER.info("Game started")

    def stop(self) -> None:
        if not self.running:
            LOGGER.info("Stop ignored: not running")
            return
        self.running = False
        LOGGER.info("Game stopped")

    def frame(self, ts: Optional[float] = None) -> Optional[TickResult]:
        """Advance the game to ``ts`` (seconds, defaults to ``clock()``).

        Returns ``None`` when the loop is stopped or the frame crashed.  A
        crash is logged and the game restarts with fresh timing so the next
        frame begins cleanly.
        """

        if not self.running:
            return None
        try:
            if ts is None:
                ts = self.clock()
            delta = max(0.0, ts - self.last_ts)
            self.last_ts = ts
            result = self.game.tick(delta)
            if self.listener is not None:
                self.listener(result)
            return result
        except Exception:
            LOGGER.exception("Crash detected, resetting game")
            self.game.reset()
            self.last_ts = self.clock()
            return None

    # Input forwarding -------------------------------------------------
    def toggle_pause(self) -> bool:
        return self.game.toggle_pause()

    def set_soft_drop(self, active: bool) -> None:
        self.game.set_soft_drop(active)

    def move_left(self) -> bool:
        return self.game.move_horizontal(-1)

    def move_right(self) -> bool:
        return self.game.move_horizontal(1)

    def rotate_clockwise(self) -> bool:
        return self.game.rotate(RotationDirection.CLOCKWISE)

    def rotate_counterclockwise(self) -> bool:
        return self.game.rotate(RotationDirection.COUNTERCLOCKWISE)

    def soft_drop_step(self) -> bool:
        return self.game.soft_drop_step()

    def hard_drop(self) -> int:
        return self.game.hard_drop()

    def hold(self) -> bool:
        return self.game.hold()

    def use_item(self, slot_index: int) -> bool:
        return self.game.use_item(slot_index)


__all__ = ["FrameListener", "FrameLoop"]
