import ast
import asyncio
import functools
import inspect
import logging
import os
import types

from .errors import CompilationError, SortError, SortRuntimeError
from .settings import USER_CODE_FILENAME

logger = logging.getLogger(__name__)

# ============================================================
# ==================== CUSTOM SORTER LOADER ==================
# ============================================================

DEFAULT_USER_CODE = '''\
def sort(arr, emit, stats):
    """
    Sort arr in place.

    emit   - report progress: emit({"comparing": [i, j]}) or
             emit({"swapping": [i, j]}). Call it at every step you want shown.
    stats  - increment stats.comparisons, stats.swaps and stats.writes.
    """
    # Example: a simple (and inefficient) bubble sort
    n = len(arr)
    swapped = True
    while swapped:
        swapped = False
        for i in range(n - 1):
            stats.comparisons += 1
            emit({"comparing": [i, i + 1]})
            if arr[i] > arr[i + 1]:
                stats.swaps += 1
                stats.writes += 2  # a swap is two array writes
                arr[i], arr[i + 1] = arr[i + 1], arr[i]
                swapped = True
                emit({"swapping": [i, i + 1]})
        n -= 1

    # Finish with an empty update to clear the highlights
    emit({})
'''


def _compile(source: str, filename: str = USER_CODE_FILENAME):
    """
    Turn source text into (callable, namespace).

    A lone expression (e.g. a lambda) is evaluated. Anything else runs as a
    module body in a fresh namespace; a function named sort wins, otherwise
    the last top-level def. Raises CompilationError.
    """
    ns = types.ModuleType("_user_sorter").__dict__
    try:
        tree = ast.parse(source, filename)
    except SyntaxError as e:
        raise CompilationError.from_exception(e) from e

    try:
        if len(tree.body) == 1 and isinstance(tree.body[0], ast.Expr):
            fn = eval(compile(ast.Expression(tree.body[0].value), filename, "eval"), ns)
        else:
            exec(compile(tree, filename, "exec"), ns)
            defs = [node.name for node in tree.body
                    if isinstance(node, (ast.FunctionDef, ast.AsyncFunctionDef))]
            fn = ns.get("sort") if callable(ns.get("sort")) else (ns[defs[-1]] if defs else None)
    except Exception as e:
        raise CompilationError.from_exception(e) from e

    if fn is None:
        raise CompilationError(f"{CompilationError.PREFIX}: no function found. "
                               "Define a function such as 'def sort(arr, emit, stats): ...'")
    if not callable(fn):
        raise CompilationError(f"{CompilationError.PREFIX}: provided code does not evaluate "
                               f"to a function (got {type(fn).__name__})")
    return fn, ns


def _as_step(fn, filename: str = USER_CODE_FILENAME):
    """
    Wrap a user callable as step(arr, emit, stats).

    Plain functions get (arr, emit, stats). Generator functions get
    (arr, stats) and each yielded value is emitted, like the built-ins.
    Coroutine functions get an awaitable emit and run on their own loop.
    Any exception except cancellation becomes a SortRuntimeError.
    """
    @functools.wraps(fn)
    def step(arr, emit, stats):
        try:
            if inspect.isgeneratorfunction(fn):
                for highlight in fn(arr, stats):
                    emit(highlight)
            elif inspect.iscoroutinefunction(fn):
                async def update(highlight=None, delta=None):
                    emit(highlight, delta)
                asyncio.run(fn(arr, update, stats))
            else:
                fn(arr, emit, stats)
        except SortError:
            raise
        except Exception as exc:
            err = SortRuntimeError.from_exception(exc, filename)
            logger.error("Error executing user code: %s", err)
            raise err from exc
    return step


def load_step_function(source: str, filename: str = USER_CODE_FILENAME):
    """
    Compile user source into a step function.
    Returns (step, None) on success, (None, CompilationError) on failure.
    """
    try:
        fn, _ = _compile(source, filename)
    except CompilationError as err:
        logger.error("Error compiling user code: %s", err)
        return None, err
    return _as_step(fn, filename), None


def load_sorter_file(filepath: str):
    """
    Load a .py file as a custom sorter.
    May define NAME (str) for display; the file stem is used otherwise.
    Returns ((display_name, step), None) on success, (None, error) on failure.
    """
    filepath = os.path.abspath(filepath)
    try:
        with open(filepath, encoding="utf-8") as f:
            source = f.read()
    except OSError as e:
        return None, CompilationError(f"{CompilationError.PREFIX}: cannot read {filepath}: {e}")
    try:
        fn, ns = _compile(source, filepath)
    except CompilationError as err:
        logger.error("Error compiling %s: %s", filepath, err)
        return None, err
    name = ns.get("NAME") or os.path.splitext(os.path.basename(filepath))[0]
    return (str(name), _as_step(fn, filepath)), None
