"""Small, fast non-cryptographic hashing for keys we control."""

from __future__ import annotations

import struct

_MASK = 0xFFFF_FFFF_FFFF_FFFF
SEED = 0x517C_C1B7_2722_0A95
SEED2 = 0x9E37_79B9_7F4A_7C15
_ROTATE = 5


def _rotate_left(h: int) -> int:
    return ((h << _ROTATE) | (h >> (64 - _ROTATE))) & _MASK


def _mix(h: int, value: int) -> int:
    return ((_rotate_left(h) ^ value) * SEED) & _MASK


def _mix_bytes(h: int, data: bytes) -> int:
    full = len(data) - len(data) % 8
    for (word,) in struct.iter_unpack("<Q", data[:full]):
        h = _mix(h, word)
    rest = data[full:]
    if len(rest) >= 4:
        h = _mix(h, int.from_bytes(rest[:4], "little"))
        rest = rest[4:]
    if len(rest) >= 2:
        h = _mix(h, int.from_bytes(rest[:2], "little"))
        rest = rest[2:]
    if rest:
        h = _mix(h, rest[0])
    return h


def _avalanche(h: int) -> int:
    h ^= h >> 33
    h = (h * 0xFF51_AFD7_ED55_8CCD) & _MASK
    h ^= h >> 33
    h = (h * 0xC4CE_B9FE_1A85_EC53) & _MASK
    return h ^ (h >> 33)


def _hash64(data: bytes, seed: int) -> int:
    h = seed ^ ((len(data) * SEED2) & _MASK)
    return _avalanche(_mix_bytes(h, data))


class FxHasher:
    """Incremental 64-bit rotate-xor-multiply hasher."""

    __slots__ = ("_h",)

    def __init__(self) -> None:
        self._h = 0

    def write(self, data: bytes) -> None:
        """Feed a run of bytes into the hash state."""
        self._h = _mix_bytes(self._h, bytes(data))

    def write_u8(self, value: int) -> None:
        """Feed a single byte value."""
        self._h = _mix(self._h, value & 0xFF)

    def write_u64(self, value: int) -> None:
        """Feed a 64-bit unsigned value."""
        self._h = _mix(self._h, value & _MASK)

    def finish(self) -> int:
        """Return the current 64-bit hash."""
        return self._h


def hash128_hex(data: bytes) -> str:
    """Return a 32-character hex digest built from two seeded 64-bit hashes."""
    data = bytes(data)
    a = _hash64(data, SEED)
    b = _hash64(data, SEED2 ^ len(data))
    return f"{a:016x}{b:016x}"