"""Serialized command dispatch.

Commands addressed to one registry are processed one at a time: a
re-entrant lock per registry is held from loading the aggregate until the
unit of work commits, so concurrent callers never interleave reads and
writes of the same registry or its reviews. Commands for different
registries proceed in parallel.
"""

import threading
from contextlib import contextmanager

from protean.utils.globals import current_domain

from reviewboard.utils.logging import command_context

_locks_guard = threading.Lock()
_locks: dict[str, threading.RLock] = {}


def lock_for(registry_id) -> threading.RLock:
    """Return the lock guarding ``registry_id``, creating it on first use."""
    key = str(registry_id)
    with _locks_guard:
        lock = _locks.get(key)
        if lock is None:
            lock = _locks[key] = threading.RLock()
        return lock


@contextmanager
def serialized(registry_id):
    with lock_for(registry_id):
        yield


def dispatch(command):
    """Process ``command`` synchronously and return the handler's result."""
    registry_id = getattr(command, "registry_id", None)

    with command_context(command):
        if registry_id is None:
            # New registry, nothing to contend on yet
            return current_domain.process(command, asynchronous=False)

        with serialized(registry_id):
            return current_domain.process(command, asynchronous=False)
