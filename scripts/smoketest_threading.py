"""
Stress test sharing immutable values and format items across threads.

Not a unit test, because it only makes sense on a free-threaded build.
"""

import sys
import time
from threading import Thread

from civiltime import CivilDateTime, TimeDelta, strftime_items

if not hasattr(sys, "_is_gil_enabled") or sys._is_gil_enabled():
    # Running with GIL enabled can still be useful to compare performance,
    # but be sure to warn that threading hasn't been stress tested.
    print("WARNING: Running with GIL enabled. Threading not stress tested.")


BASE = CivilDateTime(2016, 12, 31, 23, 59, 59, nanosecond=1_500_000_000)
ITEMS = list(strftime_items("%a %b %e %T%.f %Y"))
NUM_THREADS = 16
NUM_ITERATIONS = 2_000
STEPS = [TimeDelta(seconds=n, nanoseconds=n * 7) for n in range(-50, 51)]


def add_and_parse(steps):
    """Arithmetic, canonical formatting, and parsing on a shared value"""
    for step in steps:
        dt = BASE.checked_add(step)
        assert dt is not None
        assert CivilDateTime.parse_common_iso(str(dt)) == dt


def shared_items(steps):
    """Rendering with one shared list of format items"""
    for step in steps:
        dt = BASE.checked_add(step)
        assert dt is not None
        s = str(dt.format_with_items(ITEMS))
        del s


def main(func):
    print(f"Starting test: {func.__name__}")
    threads = []
    work = STEPS * NUM_ITERATIONS

    start_time = time.time()

    for n in range(NUM_THREADS):
        thread = Thread(target=func, args=(work[n::NUM_THREADS],))
        threads.append(thread)
        thread.start()

    for thread in threads:
        thread.join()

    end_time = time.time()
    print(f"Execution time: {end_time - start_time:.2f} seconds")


if __name__ == "__main__":
    main(add_and_parse)
    main(shared_items)
