"""Tick-driven tweens.

Nothing here sleeps or schedules itself: the front-end calls
:meth:`Animator.tick` from its frame loop (tk ``after``) and every running
tween advances to the given clock value. Playing a tween under a key that is
already running replaces the old one, which stops where it is and never fires
its ``on_finish``. A tween dropped before it ends calls its ``on_cancel``
instead.
"""

import logging
import math
import time
from typing import Any, Callable, Dict, Hashable, Optional

logger = logging.getLogger(__name__)

Easing = Callable[[float], float]


def linear(t: float) -> float:
    return t


def ease_in(t: float) -> float:
    return t * t


def ease_in_out(t: float) -> float:
    return 0.5 - math.cos(math.pi * t) / 2


class Tween:
    def __init__(
        self,
        target: Any,
        values: Dict[str, float],
        duration: float,
        easing: Easing = ease_in_out,
        on_update: Optional[Callable[[], None]] = None,
        on_finish: Optional[Callable[[], None]] = None,
        on_cancel: Optional[Callable[[], None]] = None,
    ) -> None:
        self.target = target
        self.values = dict(values)
        self.duration = max(0.0, duration)
        self.easing = easing
        self.on_update = on_update
        self.on_finish = on_finish
        self.on_cancel = on_cancel
        self.started_at = 0.0
        self._origin: Dict[str, float] = {}

    def start(self, now: float) -> None:
        self.started_at = now
        self._origin = {attr: float(getattr(self.target, attr)) for attr in self.values}

    def progress(self, now: float) -> float:
        if self.duration <= 0:
            return 1.0
        return min(1.0, max(0.0, (now - self.started_at) / self.duration))

    def step(self, now: float) -> bool:
        t = self.progress(now)
        eased = self.easing(t) if t < 1.0 else 1.0
        for attr, end in self.values.items():
            begin = self._origin[attr]
            setattr(self.target, attr, begin + (end - begin) * eased)
        if self.on_update is not None:
            self.on_update()
        if t >= 1.0:
            if self.on_finish is not None:
                self.on_finish()
            return True
        return False


def _dropped(tween: Tween) -> None:
    if tween.on_cancel is not None:
        tween.on_cancel()


class Animator:
    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._tweens: Dict[Hashable, Tween] = {}

    def __len__(self) -> int:
        return len(self._tweens)

    def running(self, key: Hashable) -> bool:
        return key in self._tweens

    def play(self, key: Hashable, tween: Tween, now: Optional[float] = None) -> None:
        if now is None:
            now = self.clock()
        previous = self._tweens.pop(key, None)
        if previous is not None:
            logger.debug("Replacing running tween %r", key)
            _dropped(previous)
        tween.start(now)
        if tween.duration <= 0:
            tween.step(now)
            return
        self._tweens[key] = tween

    def cancel(self, key: Hashable) -> bool:
        tween = self._tweens.pop(key, None)
        if tween is None:
            return False
        _dropped(tween)
        return True

    def cancel_owner(self, target: Any) -> int:
        keys = [key for key, tween in self._tweens.items() if tween.target is target]
        for key in keys:
            tween = self._tweens.pop(key, None)
            if tween is not None:
                _dropped(tween)
        return len(keys)

    def tick(self, now: Optional[float] = None) -> bool:
        if now is None:
            now = self.clock()
        for key, tween in list(self._tweens.items()):
            if self._tweens.get(key) is not tween:
                # replaced or cancelled by a callback earlier in this tick
                continue
            if tween.step(now):
                if self._tweens.get(key) is tween:
                    del self._tweens[key]
        return bool(self._tweens)

    def finish_all(self) -> None:
        while self._tweens:
            key, tween = next(iter(self._tweens.items()))
            del self._tweens[key]
            tween.step(tween.started_at + tween.duration)
