"""Canonical name generation.

Names have the form ``<base>_<batch>_<n>``: ``<base>_<batch>`` is drawn once per
renaming batch from a :class:`BatchCounter`, and ``<n>`` counts distinct
structural keys within that batch.
"""

import threading

__all__ = [
    "BatchCounter",
    "NameGenerator",
    "default_batch_counter",
    "reset_batch_counter",
]


class BatchCounter:
    """Monotonic source of per-batch name prefixes.

    Attributes
    ----------
    base : str
        Leading component of every prefix (default "f").
    """

    def __init__(self, base: str = "f") -> None:
        if not base:
            raise ValueError("base must be a non-empty string")
        self.base = base
        self._batches = 0
        self._lock = threading.Lock()

    @property
    def batches_generated(self) -> int:
        """Number of prefixes handed out since construction or last reset."""
        return self._batches

    def next_prefix(self) -> str:
        """Return a fresh prefix, e.g. ``f_0`` then ``f_1``."""
        with self._lock:
            prefix = f"{self.base}_{self._batches}"
            self._batches += 1
        return prefix

    def new_generator(self) -> "NameGenerator":
        """Start a new batch and return its name generator."""
        return NameGenerator(self.next_prefix())

    def reset(self) -> None:
        """Zero the counter so generated names are reproducible."""
        with self._lock:
            self._batches = 0


class NameGenerator:
    """Batch-scoped mapping from structural key to canonical name.

    The first request for a key mints ``<prefix>_<n>``; later requests for the
    same key return the cached name. Lookup and insertion happen under one lock.

    Attributes
    ----------
    prefix : str
        Batch prefix shared by every name this generator mints.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._names: dict[str, str] = {}
        self._lock = threading.Lock()

    def name_for(self, key: str) -> str:
        """Return the canonical name for ``key``, minting it on first sighting."""
        with self._lock:
            name = self._names.get(key)
            if name is None:
                name = f"{self.prefix}_{len(self._names)}"
                self._names[key] = name
            return name

    def __contains__(self, key: object) -> bool:
        return key in self._names

    def __len__(self) -> int:
        return len(self._names)

    @property
    def names(self) -> dict[str, str]:
        """Snapshot of the key to name assignments made so far."""
        with self._lock:
            return dict(self._names)


_DEFAULT_COUNTERS: dict[str, BatchCounter] = {}
_DEFAULT_COUNTERS_LOCK = threading.Lock()


def default_batch_counter(base: str = "f") -> BatchCounter:
    """Return the process-wide counter for ``base``, creating it on first use."""
    with _DEFAULT_COUNTERS_LOCK:
        counter = _DEFAULT_COUNTERS.get(base)
        if counter is None:
            counter = BatchCounter(base)
            _DEFAULT_COUNTERS[base] = counter
        return counter


def reset_batch_counter() -> None:
    """Reset every process-wide batch counter (test support)."""
    with _DEFAULT_COUNTERS_LOCK:
        for counter in _DEFAULT_COUNTERS.values():
            counter.reset()
