# ============================================================
# ===================== USER SETTINGS ========================
# ============================================================

MIN_ARRAY_SIZE = 10
MAX_ARRAY_SIZE = 500
DEFAULT_SIZE   = 50

MIN_DELAY_MS   = 0
MAX_DELAY_MS   = 200
DEFAULT_DELAY  = 20

# Bogo sort has no upper bound on shuffles, so the host never hands it
# more than this many elements.
BOGO_MAX_SIZE  = 10

# ============================================================
# ===================== ENGINE SETTINGS ======================
# ============================================================
#
# PAUSE_POLL_INTERVAL - seconds slept between polls of is_paused().
PAUSE_POLL_INTERVAL = 0.05
#
# RADIX_BASE - digit base used by the LSD radix sort.
RADIX_BASE = 10
#
# COMMENTARY_LINES - how many battle commentary lines are kept in memory.
COMMENTARY_LINES = 100

# Filename reported in tracebacks for user-supplied sorter source.
USER_CODE_FILENAME = "<user-code>"

ARRAY_TYPES = [
    ("Random",        "random"),
    ("Nearly Sorted", "nearly_sorted"),
    ("Reversed",      "reversed"),
]
