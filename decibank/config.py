"""
Central Configuration File (SSOT).

Values are read at call time, so callers and tests may reassign them.
"""

# --- Business Rules ---
DEFAULT_SCALE: int = 2  # fractional digits kept on every balance
DEFAULT_ROUNDING: str = "HALF_EVEN"  # RoundingPolicy name used at commit
MAX_TRANSACTION = None  # decimal string cap per add/withdraw, None = no cap

# --- Simulation Settings ---
CRIT_DELAY_SEC: float = 0.0  # sleep between compute and publish, widens races

# Retry warnings
RETRY_WARN_THRESHOLD: int = 100  # attempts per operation before logging a warning
