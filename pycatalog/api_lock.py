"""
Writer lock for DiskCache.

Each cache serializes "mutate + rewrite the file" on its own lock. Pool threads and
the Star Wars backfill threads poll that lock with a growing, jittered pause instead
of blocking on it, and give up with TimeoutError after ``lock_timeout`` seconds.
"""
import functools
import logging
import random
import threading
import time
from contextlib import contextmanager

log = logging.getLogger(__name__)

FIRST_PAUSE = 0.05   # seconds
MAX_PAUSE = 1.0
JITTER = 0.05


def acquire_with_exponential_backoff(lock: threading.Lock, timeout: float, first_pause: float = FIRST_PAUSE,
                                     max_pause: float = MAX_PAUSE, jitter: float = JITTER) -> bool:
    """
    Poll lock without blocking until it is acquired or timeout seconds have passed.

    The pause between polls starts at first_pause and doubles up to max_pause, plus
    up to jitter seconds of noise so waiting writers do not retry in lockstep.

    Returns True when the lock is held by the caller.
    """
    deadline = time.monotonic() + timeout
    pause = first_pause
    attempts = 0
    while True:
        if lock.acquire(blocking=False):
            if attempts:
                log.debug(f"Cache writer lock acquired after {attempts} retries")
            return True
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            log.warning(f"Cache writer lock still busy after {timeout}s ({attempts} retries)")
            return False
        attempts += 1
        time.sleep(min(pause, remaining) + random.uniform(0, jitter))
        pause = min(pause * 2, max_pause)


@contextmanager
def acquire_lock_with_backoff(lock, timeout, **backoff_kwargs):
    """Hold lock for the body of the with block; TimeoutError if it cannot be taken."""
    if not acquire_with_exponential_backoff(lock, timeout, **backoff_kwargs):
        raise TimeoutError(f"Cache writer lock not acquired within {timeout}s")
    try:
        yield
    finally:
        lock.release()


def uses_writer_lock(func):
    # Serializes the method on the instance lock (self.lock / self.lock_timeout)
    @functools.wraps(func)
    def wrapper(self, *args, **kwargs):
        with acquire_lock_with_backoff(self.lock, self.lock_timeout):
            return func(self, *args, **kwargs)
    return wrapper
