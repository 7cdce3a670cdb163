# ============================================================
# SortBattle - Custom Sorter Template
# ============================================================
#
# Rules:
#   1. Define a function called  sort
#   2. Either a plain function  sort(arr, emit, stats)  that calls
#      emit({"comparing": [i, j]}) / emit({"swapping": [i, j]}) on every
#      "interesting" step,
#      or a generator  sort(arr, stats)  that yields those dicts instead.
#   3. Mutate `arr` in-place - do NOT return a new list.
#   4. Count your work on stats.comparisons, stats.swaps, stats.writes.
#   5. Optionally set NAME = "My Algorithm"  (used as display name)
#
# Race it with:  sortbattle --user-code example_custom_sorter.py --algo2 quick
# ============================================================

NAME = "Stooge Sort"   # <-- change this to whatever you like


def sort(arr, stats):
    """Stooge Sort - O(n^2.7) - famously terrible, famously entertaining."""

    def stooge(lo, hi):
        stats.comparisons += 1
        yield {"comparing": [lo, hi]}
        if arr[lo] > arr[hi]:
            arr[lo], arr[hi] = arr[hi], arr[lo]
            stats.swaps += 1
            stats.writes += 2
            yield {"swapping": [lo, hi]}

        if hi - lo + 1 > 2:
            t = (hi - lo + 1) // 3
            yield from stooge(lo, hi - t)
            yield from stooge(lo + t, hi)
            yield from stooge(lo, hi - t)

    if len(arr) > 1:
        yield from stooge(0, len(arr) - 1)
