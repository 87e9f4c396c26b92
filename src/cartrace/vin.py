from __future__ import annotations

from cartrace.catalog import VIN_ALPHABET, VIN_PREFIXES

VIN_LENGTH = 17
_STRIDE = 37


def synthetic_vin(seed: int) -> str:
    chars = [VIN_ALPHABET[(seed + i * _STRIDE) % len(VIN_ALPHABET)] for i in range(VIN_LENGTH)]
    prefix = VIN_PREFIXES[seed % len(VIN_PREFIXES)]
    chars[: len(prefix)] = prefix
    return "".join(chars)
