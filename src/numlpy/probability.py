# -*- coding: utf-8 -*-
"""
numlpy.probability
==================

Random sources used for train/test sampling.

A single process-wide source is created lazily on first use and seeded from a
low-resolution clock, so repeated runs normally draw different samples.  Code
that needs reproducibility passes an explicit seed (or ``RandomState``) which
is threaded through the learner instead of touching the shared source.
"""
from __future__ import annotations

import threading
import time

import numpy as np
from sklearn.utils import check_random_state

_LOCK = threading.Lock()
_PROCESS_SOURCE: np.random.RandomState | None = None


def _time_seed() -> int:
    # seconds resolution, folded into the 32 bit range RandomState accepts
    return int(time.time()) & 0xFFFFFFFF


def process_random_source() -> np.random.RandomState:
    """Return the shared random source, seeding it from the clock on first use."""
    global _PROCESS_SOURCE
    with _LOCK:
        if _PROCESS_SOURCE is None:
            _PROCESS_SOURCE = np.random.RandomState(_time_seed())
        return _PROCESS_SOURCE


def reseed_process_source(seed: int | None = None) -> None:
    """Reset the shared source.  ``None`` reseeds from the clock."""
    global _PROCESS_SOURCE
    with _LOCK:
        _PROCESS_SOURCE = np.random.RandomState(_time_seed() if seed is None else seed)


def check_random_source(random_state=None) -> np.random.RandomState:
    """Turn ``random_state`` into a ``RandomState``.

    ``None`` maps to the process-wide source rather than numpy's global one;
    ints and ``RandomState`` instances are handled by scikit-learn.
    """
    if random_state is None:
        return process_random_source()
    return check_random_state(random_state)


def uniform_index(source: np.random.RandomState, total: int) -> int:
    """Draw an index uniformly from ``[0, total)``."""
    return int(source.randint(0, total))
