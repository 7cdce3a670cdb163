import numpy as np

from .settings import ARRAY_TYPES, BOGO_MAX_SIZE

ARRAY_KINDS = [k for _, k in ARRAY_TYPES]


def effective_size(size: int, keys) -> int:
    """Clamp the array size when bogo sort is one of the contenders."""
    if "bogo" in keys and size > BOGO_MAX_SIZE:
        return BOGO_MAX_SIZE
    return size


def generate_array(size: int, kind: str = "random", rng=None) -> list:
    """
    Values 1..size arranged according to kind:
      random        - full shuffle
      nearly_sorted - size // 10 random pair swaps
      reversed      - descending
    rng may be a numpy Generator or an int seed.
    """
    if kind not in ARRAY_KINDS:
        raise ValueError(f"Unknown array type: {kind}")
    rng = np.random.default_rng(rng)
    arr = np.arange(1, size + 1)
    if kind == "random":
        rng.shuffle(arr)
    elif kind == "nearly_sorted":
        for _ in range(size // 10):
            i, j = rng.integers(0, size, size=2)
            arr[i], arr[j] = arr[j], arr[i]
    else:
        arr = arr[::-1]
    return arr.tolist()
