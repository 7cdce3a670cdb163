import functools
import math
import random
from numbers import Integral

from .settings import RADIX_BASE
from .stats import Highlight

# ============================================================
# ======================== CATALOG ===========================
# ============================================================

ALGORITHMS = [
    ("Bubble Sort \"The Bumbling Brute\"",        "bubble",
     "Compares adjacent elements and swaps them if they are in the wrong order. Simple but slow."),
    ("Selection Sort \"The Methodical Miner\"",   "selection",
     "Repeatedly finds the minimum element from the unsorted part and puts it at the beginning."),
    ("Insertion Sort \"The Patient Card Player\"", "insertion",
     "Builds the final sorted array one item at a time. Efficient for small or nearly-sorted datasets."),
    ("Quick Sort \"The Swift Strategist\"",       "quick",
     "A fast, recursive 'divide and conquer' algorithm that picks a pivot and partitions the array around it."),
    ("Merge Sort \"The Divide and Conqueror\"",   "merge",
     "Another 'divide and conquer' algorithm. It divides the array into halves, sorts them, and then merges them back."),
    ("Heap Sort \"The Heap King\"",               "heap",
     "A comparison-based sorting technique based on a Binary Heap data structure."),
    ("Radix Sort \"The Digital Postman\"",        "radix",
     "A non-comparative integer sorting algorithm that sorts data with integer keys by grouping keys by individual digits."),
    ("Bucket Sort \"The Organized Collector\"",   "bucket",
     "Distributes elements into a number of buckets. Each bucket is then sorted individually."),
    ("Bogo Sort \"The Agent of Chaos\"",          "bogo",
     "Randomly shuffles the array until it is sorted. Do not use for serious work!"),
]

USER_CODE   = "user_code"
USER_NAME   = "Your Algorithm"
KEYS        = [k for _, k, _ in ALGORITHMS] + [USER_CODE]


def display_name(key: str) -> str:
    if key == USER_CODE:
        return USER_NAME
    for name, k, _ in ALGORITHMS:
        if k == key:
            return name
    raise KeyError(f"Unknown key: {key}")

# ============================================================
# ===================== SORTING ALGORITHMS ===================
# ============================================================
#
# Every algorithm is a generator taking (arr, stats). It mutates arr in
# place, bumps the counters on stats directly and yields a Highlight at
# each step that should be visible. The yield is the only place a run can
# be paused, slowed down or cancelled.

def bubble_sort(arr, stats):
    n, swapped = len(arr), True
    while swapped:
        swapped = False
        for i in range(n - 1):
            stats.comparisons += 1
            yield Highlight(comparing=[i, i+1])
            if arr[i] > arr[i+1]:
                stats.swaps += 1; stats.writes += 2
                arr[i], arr[i+1] = arr[i+1], arr[i]
                swapped = True
                yield Highlight(swapping=[i, i+1])
        n -= 1

def selection_sort(arr, stats):
    n = len(arr)
    for i in range(n - 1):
        mi = i
        for j in range(i+1, n):
            stats.comparisons += 1
            yield Highlight(comparing=[mi, j])
            if arr[j] < arr[mi]: mi = j
        if mi != i:
            stats.swaps += 1; stats.writes += 2
            arr[i], arr[mi] = arr[mi], arr[i]
            yield Highlight(swapping=[i, mi])

def insertion_sort(arr, stats):
    # Shifts are booked as swaps as well as writes.
    for i in range(1, len(arr)):
        key = arr[i]; j = i - 1
        yield Highlight(comparing=[i])
        while j >= 0 and arr[j] > key:
            stats.comparisons += 1; stats.swaps += 1; stats.writes += 1
            arr[j+1] = arr[j]
            yield Highlight(swapping=[j, j+1])
            j -= 1
        if j >= 0: stats.comparisons += 1
        stats.writes += 1
        arr[j+1] = key
        yield Highlight(swapping=[j+1])

def quick_sort(arr, stats):
    def _partition(lo, hi):
        pivot = arr[hi]; i = lo - 1
        for j in range(lo, hi):
            stats.comparisons += 1
            yield Highlight(comparing=[j, hi])
            if arr[j] < pivot:
                i += 1
                stats.swaps += 1; stats.writes += 2
                arr[i], arr[j] = arr[j], arr[i]
                yield Highlight(swapping=[i, j])
        stats.swaps += 1; stats.writes += 2
        arr[i+1], arr[hi] = arr[hi], arr[i+1]
        yield Highlight(swapping=[i+1, hi])
        return i + 1

    def _q(lo, hi):
        if lo >= hi: return
        p = yield from _partition(lo, hi)
        yield from _q(lo, p - 1)
        yield from _q(p + 1, hi)

    yield from _q(0, len(arr) - 1)

def merge_sort(arr, stats):
    def _m(lo, mid, hi):
        L = arr[lo:mid+1]; R = arr[mid+1:hi+1]
        i = j = 0; k = lo
        while i < len(L) and j < len(R):
            stats.comparisons += 1
            if L[i] <= R[j]: arr[k] = L[i]; i += 1
            else:            arr[k] = R[j]; j += 1
            stats.swaps += 1; stats.writes += 1
            yield Highlight(comparing=[k]); k += 1
        for v in L[i:] + R[j:]:
            arr[k] = v
            stats.swaps += 1; stats.writes += 1
            yield Highlight(comparing=[k]); k += 1

    def _ms(lo, hi):
        if lo >= hi: return
        mid = lo + (hi - lo) // 2
        yield from _ms(lo, mid); yield from _ms(mid+1, hi)
        yield from _m(lo, mid, hi)

    yield from _ms(0, len(arr) - 1)

def heap_sort(arr, stats):
    def hfy(n, i):
        lg, l, r = i, 2*i+1, 2*i+2
        for child in (l, r):
            if child < n:
                stats.comparisons += 1
                yield Highlight(comparing=[child, lg])
                if arr[child] > arr[lg]: lg = child
        if lg != i:
            stats.swaps += 1; stats.writes += 2
            arr[i], arr[lg] = arr[lg], arr[i]
            yield Highlight(swapping=[i, lg])
            yield from hfy(n, lg)

    n = len(arr)
    for i in range(n//2 - 1, -1, -1): yield from hfy(n, i)
    for i in range(n-1, 0, -1):
        stats.swaps += 1; stats.writes += 2
        arr[0], arr[i] = arr[i], arr[0]
        yield Highlight(swapping=[0, i])
        yield from hfy(i, 0)

def _check_non_negative(arr, name, integers=False):
    for v in arr:
        if integers and not isinstance(v, Integral):
            raise ValueError(f"{name} only handles integers, got {v!r}")
        if v < 0:
            raise ValueError(f"{name} only handles non-negative values, got {v!r}")

def _counting_radix(arr, stats, exp, base):
    n = len(arr); out = [0]*n; cnt = [0]*base
    for v in arr: cnt[(v//exp) % base] += 1
    for i in range(1, base): cnt[i] += cnt[i-1]
    for i in range(n-1, -1, -1):
        d = (arr[i]//exp) % base; out[cnt[d]-1] = arr[i]; cnt[d] -= 1
    for i in range(n):
        stats.swaps += 1; stats.writes += 1
        arr[i] = out[i]
        yield Highlight(swapping=[i])

def radix_sort(arr, stats, base=RADIX_BASE):
    """LSD radix sort; one counting pass per digit until exp passes the maximum."""
    if not arr: return
    _check_non_negative(arr, "Radix sort", integers=True)
    mv, exp = max(arr), 1
    while mv // exp > 0:
        yield from _counting_radix(arr, stats, exp, base)
        exp *= base

def bucket_sort(arr, stats):
    n = len(arr)
    if n == 0: return
    _check_non_negative(arr, "Bucket sort")
    count = math.isqrt(n)
    bkts  = [[] for _ in range(count)]
    mv    = max(arr) or 1
    for v in arr:
        bkts[int(v / (mv + 1) * count)].append(v)
        stats.swaps += 1
    # Buckets are sorted off to the side; only the copy back is visible.
    for bk in bkts:
        for j in range(1, len(bk)):
            cur = bk[j]; k = j - 1
            while k >= 0 and bk[k] > cur: bk[k+1] = bk[k]; k -= 1
            bk[k+1] = cur
    i = 0
    for bk in bkts:
        for v in bk:
            arr[i] = v
            stats.writes += 1
            yield Highlight(swapping=[i]); i += 1

def bogo_sort(arr, stats, rng=random):
    def is_sorted():
        for i in range(len(arr) - 1):
            stats.comparisons += 1
            if arr[i] > arr[i+1]: return False
        return True

    while not is_sorted():
        for i in range(len(arr)-1, 0, -1):
            j = rng.randint(0, i)
            stats.swaps += 1; stats.writes += 2
            arr[i], arr[j] = arr[j], arr[i]
        yield Highlight()

# ============================================================
# ====================== STEP FUNCTIONS ======================
# ============================================================

def driven(gen_fn):
    """Adapt a generator algorithm into a step(arr, emit, stats) function."""
    @functools.wraps(gen_fn)
    def step(arr, emit, stats):
        gen = gen_fn(arr, stats)
        try:
            for highlight in gen:
                emit(highlight)
        finally:
            gen.close()
    return step

BUILTINS = {
    "bubble":    bubble_sort,
    "selection": selection_sort,
    "insertion": insertion_sort,
    "quick":     quick_sort,
    "merge":     merge_sort,
    "heap":      heap_sort,
    "radix":     radix_sort,
    "bucket":    bucket_sort,
    "bogo":      bogo_sort,
}

def get_step_function(key, rng=None):
    """
    Return the step function for a built-in key.
    user_code is not handled here; see loader.load_step_function.
    """
    if key == USER_CODE:
        raise ValueError("user_code has no built-in step function; compile it with the loader")
    if key not in BUILTINS:
        raise KeyError(f"Unknown key: {key}")
    fn = BUILTINS[key]
    if key == "bogo" and rng is not None:
        fn = functools.wraps(bogo_sort)(functools.partial(bogo_sort, rng=rng))
    return driven(fn)
