"""Clock - tick counter and TickContext factory."""

import random
from typing import Callable

from tick_habitat.types import TickContext


class Clock:
    def __init__(self) -> None:
        self._tick_number = 0

    @property
    def tick_number(self) -> int:
        return self._tick_number

    def advance(self) -> int:
        self._tick_number += 1
        return self._tick_number

    def context(self, stop_fn: Callable[[], None], rng: random.Random) -> TickContext:
        return TickContext(
            tick_number=self._tick_number,
            request_stop=stop_fn,
            random=rng,
        )

    def reset(self, tick_number: int = 0) -> None:
        if tick_number < 0:
            raise ValueError("tick_number must not be negative")
        self._tick_number = tick_number
