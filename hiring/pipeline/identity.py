"""Human readable identifiers for applications, jobs and talent-pool entries.

Values are generated optimistically and probed against the store until an
unused one is found; the unique constraints on the columns remain the final
guard when two requests race for the same value.
"""
import random
import string
import time

from ..errors import StorageError

_ALNUM = string.ascii_uppercase + string.digits
_BASE36 = string.digits + string.ascii_uppercase

JOB = "job"
TALENT_POOL = "talent_pool"
APPLICATION = "application"

MAX_ATTEMPTS = 20

_rng = random.SystemRandom()


def _short_code(length=8):
    return "".join(_rng.choice(_ALNUM) for _ in range(length))


def _application_id():
    millis = int(time.time() * 1000)
    suffix = "".join(_rng.choice(_BASE36) for _ in range(9))
    return f"APP-{millis}-{suffix}"


_GENERATORS = {
    JOB: _short_code,
    TALENT_POOL: _short_code,
    APPLICATION: _application_id,
}


def next_id(kind):
    try:
        return _GENERATORS[kind]()
    except KeyError:
        raise ValueError(f"unknown identifier kind: {kind!r}") from None


def allocate(kind, exists, max_attempts=MAX_ATTEMPTS):
    """Return a value of ``kind`` for which ``exists(value)`` is false."""
    for _ in range(max_attempts):
        value = next_id(kind)
        if not exists(value):
            return value
    raise StorageError(f"could not allocate a unique {kind} id", kind=kind, attempts=max_attempts)
