"""
Utility decorators and context managers.
"""

import time
from contextlib import contextmanager
from typing import Dict, Iterator


@contextmanager
def timer() -> Iterator[Dict[str, float]]:
    """
    Measure elapsed wall time of a block.

    The yielded dict gets an "ms" entry when the block exits, so read it
    after the with statement:

        with timer() as t:
            do_work()
        elapsed = t["ms"]
    """
    result = {"ms": 0.0}
    start = time.perf_counter()
    try:
        yield result
    finally:
        result["ms"] = (time.perf_counter() - start) * 1000

