"""Seed canonicalization and hashing utilities.

Seeds are opaque: any string or integer is accepted. Integers and their
decimal string form are the same seed, so ``42`` and ``"42"`` produce the
same world.
"""

from __future__ import annotations

from dataclasses import dataclass
import hashlib


class SeedParseError(ValueError):
    """Raised when a seed cannot be used."""


@dataclass(frozen=True)
class ParsedSeed:
    """Validated seed and deterministic metadata."""

    original: str | int
    canonical: str
    seed_hash: int


def seed_hash64(seed: str) -> int:
    """Hash canonical seed to a deterministic unsigned 64-bit integer."""

    digest = hashlib.blake2b(
        seed.encode("utf-8"),
        digest_size=8,
        person=b"hexmapv1",
    ).digest()
    return int.from_bytes(digest, byteorder="big", signed=False)


def canonical_seed(seed: str | int) -> str:
    """Return the canonical text form of `seed`."""

    # bool is an int subclass; True/False are almost always a caller mistake.
    if isinstance(seed, bool):
        raise SeedParseError("Seed must be a string or integer, not a bool.")
    if isinstance(seed, int):
        return str(seed)
    if isinstance(seed, str):
        return seed
    raise SeedParseError(f"Seed must be a string or integer, got {type(seed).__name__}.")


def parse_seed(seed: str | int) -> ParsedSeed:
    """Parse `seed` into its canonical form and 64-bit hash."""

    if seed is None:
        raise SeedParseError("Seed is required.")
    canonical = canonical_seed(seed)
    return ParsedSeed(seed, canonical, seed_hash64(canonical))
