import os
import re
import sys

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import pytest

from hiring.errors import StorageError
from hiring.pipeline import identity


def test_short_codes_are_eight_uppercase_alphanumerics():
    for kind in (identity.JOB, identity.TALENT_POOL):
        for _ in range(50):
            assert re.fullmatch(r"[A-Z0-9]{8}", identity.next_id(kind))


def test_application_id_format():
    value = identity.next_id(identity.APPLICATION)
    assert re.fullmatch(r"APP-\d{13,}-[0-9A-Z]{9}", value)


def test_allocate_skips_taken_values():
    seen = []

    def exists(value):
        seen.append(value)
        return len(seen) < 3

    value = identity.allocate(identity.JOB, exists)
    assert value == seen[-1]
    assert len(seen) == 3


def test_allocate_gives_up_with_storage_error():
    with pytest.raises(StorageError):
        identity.allocate(identity.JOB, lambda value: True, max_attempts=5)


def test_unknown_kind():
    with pytest.raises(ValueError):
        identity.next_id("nope")
