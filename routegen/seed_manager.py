"""Deterministic seed derivation for the randomized searches."""

from __future__ import annotations

import hashlib
import random
from typing import Any, Optional


class SeedManager:
    """Derives per-search seeds from one master seed.

    Each search asks for a ``random.Random`` keyed by what it is doing (e.g.
    ``"hybrid", start, goal, call_no``). With a master seed the same keys give
    the same stream regardless of how many other searches ran before or in
    parallel; without one every stream is freshly seeded by the OS.

    Usage:
        seeds = SeedManager(42)
        rng = seeds.create_random_state("hybrid", 10, 20, 0)
    """

    def __init__(self, master_seed: Optional[int] = None) -> None:
        self.master_seed = master_seed

    def derive_seed(self, *components: Any) -> Optional[int]:
        """Return a positive 31-bit seed for ``components``, or None without a master seed.

        The seed is the first four bytes of
        ``sha256("<master>:<c1>:<c2>...")``, masked to a non-negative int.
        """
        if self.master_seed is None:
            return None

        key = f"{self.master_seed}:" + ":".join(str(c) for c in components)
        digest = hashlib.sha256(key.encode()).digest()
        return int.from_bytes(digest[:4], byteorder="big") & 0x7FFFFFFF

    def create_random_state(self, *components: Any) -> random.Random:
        """Return a new ``random.Random`` seeded from ``components``."""
        derived_seed = self.derive_seed(*components)
        rng = random.Random()
        if derived_seed is not None:
            rng.seed(derived_seed)
        return rng
