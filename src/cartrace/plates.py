from __future__ import annotations

from cartrace.errors import PlateValidationError


def normalize_plate(plate: str | None) -> str:
    return (plate or "").strip().upper()


def mask_plate(plate: str | None) -> str:
    p = normalize_plate(plate)
    if len(p) <= 2:
        return "**"
    if len(p) <= 4:
        return p[0] + "**" + p[-1]
    return p[:2] + "***" + p[-2:]


def _has_surrogates(text: str) -> bool:
    return any("\ud800" <= ch <= "\udfff" for ch in text)


def validate_plate(plate: object, min_length: int = 1, *, missing_message: str = "Missing plate") -> str:
    """Return the normalized plate or raise ``PlateValidationError``.

    Blank and non-string values count as missing. Anything shorter than
    ``min_length`` after trimming, or holding unpaired surrogates that cannot
    be encoded back into a response, is rejected as invalid.
    """
    if not isinstance(plate, str) or not plate.strip():
        raise PlateValidationError(missing_message)
    normalized = normalize_plate(plate)
    if len(normalized) < min_length or _has_surrogates(normalized):
        raise PlateValidationError("Invalid plate")
    return normalized
