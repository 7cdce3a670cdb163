import random
import textwrap
import threading
import time
from pathlib import Path

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from sortbattle.algorithms import BUILTINS
from sortbattle.driver import RunState, SortDriver
from sortbattle.errors import CompilationError, SortRuntimeError
from sortbattle.loader import load_sorter_file
from sortbattle.stats import Highlight

EXAMPLE = Path(__file__).resolve().parents[1] / "example_custom_sorter.py"


def test_completed_run(recorder):
    data = [5, 3, 8, 1]
    driver = SortDriver("bubble", recorder)
    stats = driver.run(data)
    assert driver.state is RunState.COMPLETED
    assert data == [5, 3, 8, 1]
    assert driver.arr == [1, 3, 5, 8]
    assert (stats.comparisons, stats.swaps, stats.writes) == (6, 4, 8)
    assert stats.time >= 0
    # ten step events plus the final one
    assert len(recorder.calls) == 11
    arr, highlight, final, error = recorder.calls[-1]
    assert arr == [1, 3, 5, 8]
    assert highlight == Highlight()
    assert final == stats
    assert error is None


@pytest.mark.parametrize("key", [k for k in BUILTINS if k != "bogo"])
@settings(max_examples=25, deadline=None)
@given(data=st.lists(st.integers(min_value=0, max_value=500), max_size=25))
def test_counters_never_go_backwards(key, data):
    seen = []
    stats = SortDriver(key, lambda a, h, s, e=None: seen.append(s)).run(data)
    for before, after in zip(seen, seen[1:]):
        assert after.comparisons >= before.comparisons
        assert after.swaps >= before.swaps
        assert after.writes >= before.writes
    assert seen[-1] == stats


def test_bogo_through_driver_with_seed(recorder):
    driver = SortDriver("bogo", recorder, rng=random.Random(3))
    stats = driver.run([1, 2, 3])
    assert (stats.comparisons, stats.swaps) == (2, 0)
    assert len(recorder.calls) == 1


def test_elapsed_time_excludes_pause(control):
    def callback(arr, highlight, stats, error=None):
        if stats.comparisons == 1 and not control.is_paused() and not fired:
            fired.append(True)
            control.pause()
            threading.Timer(0.3, control.resume).start()

    fired = []
    driver = SortDriver("bubble", callback, control.get_delay, control.is_paused)
    start = time.perf_counter()
    stats = driver.run([4, 3, 2, 1])
    wall_ms = (time.perf_counter() - start) * 1000
    assert wall_ms >= 290
    assert stats.time < wall_ms - 250


def test_cancel_stops_callbacks(control):
    calls = []

    def callback(arr, highlight, stats, error=None):
        calls.append(stats)
        if len(calls) == 3:
            control.cancel()

    driver = SortDriver("bubble", callback, control.get_delay, control.is_paused,
                        control.is_cancelled)
    assert driver.run(list(range(20, 0, -1))) is None
    assert driver.state is RunState.CANCELLED
    assert len(calls) == 3
    assert driver.error is None


def test_compile_error_reports_and_leaves_array_alone(recorder):
    data = [3, 1, 2]
    driver = SortDriver("user_code", recorder, source="def sort(arr, emit, stats)\n  pass")
    assert driver.run(data) is None
    assert driver.state is RunState.FAILED
    assert isinstance(driver.error, CompilationError)
    assert driver.arr == [3, 1, 2]
    (arr, _, stats, error), = recorder.calls
    assert arr == [3, 1, 2]
    assert (stats.comparisons, stats.swaps, stats.writes) == (0, 0, 0)
    assert error.startswith("Compilation Error:")


def test_runtime_error_reports_pre_run_array(recorder):
    source = textwrap.dedent("""\
        def sort(arr, emit, stats):
            arr[0], arr[1] = arr[1], arr[0]
            stats.swaps += 1
            emit({"swapping": [0, 1]})
            raise ZeroDivisionError("division by zero")
    """)
    driver = SortDriver("user_code", recorder, source=source)
    assert driver.run([1, 2, 3]) is None
    assert driver.state is RunState.FAILED
    assert isinstance(driver.error, SortRuntimeError)
    assert driver.arr == [2, 1, 3]
    arr, _, stats, error = recorder.calls[-1]
    assert arr == [1, 2, 3]
    assert stats.swaps == 1
    assert error.startswith("Runtime Error: division by zero (at line 5")
    assert len(recorder.calls) == 2


def test_builtin_failure_becomes_runtime_error(recorder):
    driver = SortDriver("radix", recorder)
    assert driver.run([5, -2, 1]) is None
    assert str(driver.error).startswith("Runtime Error:")
    assert recorder.calls[-1][0] == [5, -2, 1]


def test_callback_errors_do_not_escape():
    def callback(*args):
        raise RuntimeError("host blew up")

    driver = SortDriver("quick", callback)
    assert driver.run([2, 1]) is None
    assert driver.state is RunState.FAILED
    assert "host blew up" in str(driver.error)


def test_runs_are_fresh(recorder):
    driver = SortDriver("selection", recorder)
    first = driver.run([3, 2, 1])
    second = driver.run([3, 2, 1])
    assert (first.comparisons, first.swaps, first.writes) == (3, 1, 2)
    assert (second.comparisons, second.swaps, second.writes) == (3, 1, 2)
    assert first is not second


def test_user_code_requires_source():
    with pytest.raises(ValueError):
        SortDriver("user_code")
    with pytest.raises(KeyError):
        SortDriver("sleep")


def test_independent_drivers_on_threads():
    data = list(range(30, 0, -1))
    results = {}

    def go(key):
        results[key] = SortDriver(key).run(data)

    threads = [threading.Thread(target=go, args=(k,)) for k in ("heap", "merge", "insertion")]
    for t in threads: t.start()
    for t in threads: t.join()
    assert all(r is not None for r in results.values())
    assert data == list(range(30, 0, -1))


def test_final_callback_error_does_not_escape():
    calls = []

    def callback(arr, highlight, stats, error=None):
        calls.append(highlight)
        if not highlight:
            raise RuntimeError("host blew up on final")

    driver = SortDriver("bubble", callback)
    stats = driver.run([2, 1])
    assert driver.state is RunState.COMPLETED
    assert driver.error is None
    assert (stats.comparisons, stats.swaps) == (1, 1)
    assert calls[-1] == Highlight()


def test_empty_input_gets_only_the_final_callback(recorder):
    driver = SortDriver("merge", recorder)
    stats = driver.run([])
    assert driver.state is RunState.COMPLETED
    assert (stats.comparisons, stats.swaps, stats.writes) == (0, 0, 0)
    (arr, highlight, _, error), = recorder.calls
    assert (arr, highlight, error) == ([], Highlight(), None)

    def boom(*args):
        raise RuntimeError("host blew up")

    assert SortDriver("merge", boom).run([]) is not None


def test_prebuilt_step_and_name(recorder):
    (name, step), err = load_sorter_file(str(EXAMPLE))
    assert err is None
    driver = SortDriver("user_code", recorder, step=step, name=name)
    assert driver.name == "Stooge Sort"
    assert driver.run([3, 1, 2]) is not None
    assert driver.arr == [1, 2, 3]
