import threading
from contextlib import contextmanager


class KeyedLock:
    """Process-local mutual exclusion per key (candidate id).

    Locks are created on demand and dropped once no thread holds or waits
    for them, so the registry does not grow with the number of candidates.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks = {}  # key -> [lock, refcount]

    @contextmanager
    def hold(self, key):
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
        entry[0].acquire()
        try:
            yield
        finally:
            entry[0].release()
            with self._guard:
                entry[1] -= 1
                if entry[1] == 0:
                    self._locks.pop(key, None)

    def __len__(self):
        with self._guard:
            return len(self._locks)


candidate_locks = KeyedLock()
