"""Instrumented sorting engine for racing sorting algorithms step by step."""

from .algorithms import ALGORITHMS, KEYS, USER_CODE, get_step_function
from .battle import Battle, BattleConfig, BattleResult, run_battle
from .control import RunControl
from .driver import RunState, SortDriver
from .errors import CompilationError, ConfigError, SortCancelled, SortError, SortRuntimeError
from .loader import DEFAULT_USER_CODE, load_sorter_file, load_step_function
from .stats import Highlight, SortStats

__version__ = "1.0.0"
