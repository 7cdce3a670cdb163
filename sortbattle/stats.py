from dataclasses import dataclass, field, asdict
from typing import List, Mapping, Optional

COUNTER_FIELDS = ("comparisons", "swaps", "writes", "time")


@dataclass
class SortStats:
    """
    Performance counters for one run.

    comparisons / swaps / writes only grow while the run is in progress.
    time is the elapsed run time in milliseconds, pauses excluded, and is
    set once by the driver when the run ends.
    """
    comparisons: int = 0
    swaps:       int = 0
    writes:      int = 0
    time:      float = 0.0

    def update(self, delta: Optional[Mapping] = None):
        """Overwrite the fields present in delta; unknown keys are ignored."""
        if not delta:
            return
        if isinstance(delta, SortStats):
            delta = asdict(delta)
        for name in COUNTER_FIELDS:
            if name in delta:
                setattr(self, name, delta[name])

    def copy(self) -> "SortStats":
        return SortStats(self.comparisons, self.swaps, self.writes, self.time)


@dataclass(frozen=True)
class Highlight:
    comparing: List[int] = field(default_factory=list)
    swapping:  List[int] = field(default_factory=list)

    @classmethod
    def coerce(cls, value) -> "Highlight":
        """Accept a Highlight, a {"comparing": [...], "swapping": [...]} mapping or None."""
        if value is None:
            return cls()
        if isinstance(value, cls):
            return value
        if isinstance(value, Mapping):
            return cls(list(value.get("comparing") or ()), list(value.get("swapping") or ()))
        raise TypeError(f"highlight must be a Highlight or a mapping, not {type(value).__name__}")

    def __bool__(self):
        return bool(self.comparing or self.swapping)
