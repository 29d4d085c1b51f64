import time
from contextlib import contextmanager


@contextmanager
def timed_stage(name: str, verbose: bool = True):
    """
    Context manager printing a start message and the elapsed time
    for a meshing stage.
    """
    if verbose:
        print(f"[{name}] started...")
    t0 = time.time()
    try:
        yield
    finally:
        if verbose:
            dt = time.time() - t0
            print(f"[{name}] finished in {dt:.2f} s")
