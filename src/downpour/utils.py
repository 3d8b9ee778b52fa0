import time


def now() -> float:
    return time.perf_counter()


def to_ms(seconds: float) -> float:
    return seconds * 1000.0
