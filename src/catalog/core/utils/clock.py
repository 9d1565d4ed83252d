import time


def now_millis() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return time.time_ns() // 1_000_000
