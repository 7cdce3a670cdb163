"""Two algorithms racing over the same input, each on its own thread."""

import logging
import random
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from .algorithms import KEYS, USER_CODE
from .arrays import ARRAY_KINDS, effective_size, generate_array
from .control import RunControl
from .driver import SortDriver
from .errors import ConfigError
from .settings import (COMMENTARY_LINES, DEFAULT_DELAY, DEFAULT_SIZE, MAX_ARRAY_SIZE,
                       MAX_DELAY_MS, MIN_ARRAY_SIZE, MIN_DELAY_MS)

logger = logging.getLogger(__name__)


@dataclass
class BattleConfig:
    algo1:      str = "bubble"
    algo2:      str = "quick"
    array_size: int = DEFAULT_SIZE
    array_type: str = "random"
    delay:      int = DEFAULT_DELAY

    def validate(self) -> Dict[str, str]:
        """Return {field: message} for every invalid field; empty when valid."""
        errors = {}
        for name in ("algo1", "algo2"):
            if getattr(self, name) not in KEYS:
                errors[name] = f"Unknown algorithm: {getattr(self, name)}"
        if not MIN_ARRAY_SIZE <= self.array_size <= MAX_ARRAY_SIZE:
            errors["array_size"] = f"Size must be {MIN_ARRAY_SIZE}-{MAX_ARRAY_SIZE}."
        if not MIN_DELAY_MS <= self.delay <= MAX_DELAY_MS:
            errors["delay"] = f"Delay must be {MIN_DELAY_MS}-{MAX_DELAY_MS}ms."
        if self.array_type not in ARRAY_KINDS:
            errors["array_type"] = f"Unknown array type: {self.array_type}"
        return errors

    @property
    def effective_size(self) -> int:
        return effective_size(self.array_size, (self.algo1, self.algo2))


@dataclass
class BattleResult:
    name:        str
    time:        float = 0.0   # seconds
    comparisons: int = 0
    swaps:       int = 0
    writes:      int = 0
    error:       Optional[str] = None

    @property
    def finished(self) -> bool:
        return self.error is None


@dataclass
class Arena:
    arena_id: int
    driver:   SortDriver
    result:   Optional[BattleResult] = None
    thread:   Optional[threading.Thread] = field(default=None, repr=False)


class Battle:
    """
    Builds one initial array and races two drivers over copies of it.

    callback_factory(arena_id) may return a per-arena update callback with
    the driver's (arr, highlight, stats, error=None) signature. User code
    comes either as source text or as a prebuilt user_step with user_name.
    """

    def __init__(self, config: BattleConfig, user_code: Optional[str] = None,
                 control: Optional[RunControl] = None,
                 callback_factory: Optional[Callable[[int], Callable]] = None,
                 seed=None, user_step: Optional[Callable] = None,
                 user_name: Optional[str] = None):
        errors = config.validate()
        if USER_CODE in (config.algo1, config.algo2) and not (user_code or user_step):
            errors["user_code"] = "User code must be provided for 'user_code' algorithm."
        if errors:
            raise ConfigError("; ".join(errors.values()))
        self.config     = config
        self.control    = control or RunControl(config.delay)
        self.commentary = deque(maxlen=COMMENTARY_LINES)
        self.initial    = generate_array(config.effective_size, config.array_type, seed)

        rng = random.Random(seed)
        self.arenas = []
        for arena_id, key in enumerate((config.algo1, config.algo2), start=1):
            cb = callback_factory(arena_id) if callback_factory else None
            user = key == USER_CODE
            driver = SortDriver(key, cb, self.control.get_delay, self.control.is_paused,
                                self.control.is_cancelled,
                                source=user_code if user else None,
                                rng=random.Random(rng.random()),
                                step=user_step if user else None,
                                name=user_name if user else None)
            self.arenas.append(Arena(arena_id, driver))

    def comment(self, arena: Arena, text: str):
        line = f"[Arena {arena.arena_id}] {text}"
        self.commentary.append(f"> {line}")
        logger.info(line)

    def _run_arena(self, arena: Arena):
        d = arena.driver
        self.comment(arena, f"{d.name} prepares for battle!")
        stats = d.run(self.initial)
        if stats is not None:
            self.comment(arena, f"{d.name} has finished!")
            arena.result = BattleResult(d.name, stats.time / 1000.0,
                                        stats.comparisons, stats.swaps, stats.writes)
        else:
            error = str(d.error) if d.error is not None else None
            if error is not None:
                self.comment(arena, f"Fatal error in {d.name}: {error}")
            arena.result = BattleResult(d.name, error=error or "cancelled")

    def start(self):
        for arena in self.arenas:
            arena.thread = threading.Thread(target=self._run_arena, args=(arena,),
                                            name=f"arena-{arena.arena_id}", daemon=True)
            arena.thread.start()

    def join(self, timeout=None) -> List[BattleResult]:
        for arena in self.arenas:
            if arena.thread is not None:
                arena.thread.join(timeout)
        return self.results

    @property
    def results(self) -> List[BattleResult]:
        return [a.result for a in self.arenas if a.result is not None]

    def cancel(self):
        self.control.cancel()


def run_battle(config: BattleConfig, user_code: Optional[str] = None, **kwargs) -> List[BattleResult]:
    battle = Battle(config, user_code, **kwargs)
    battle.start()
    return battle.join()
