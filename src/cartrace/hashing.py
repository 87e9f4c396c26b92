from __future__ import annotations

_FNV_OFFSET_BASIS = 0x811C9DC5
_FNV_PRIME = 0x01000193


def stable_hash(text: str) -> int:
    """32-bit FNV-1a over the UTF-8 bytes of ``text``.

    Unlike the builtin ``hash()`` the result does not depend on
    PYTHONHASHSEED, so the same plate seeds the same snapshot in every process.
    Lone surrogates are hashed as their raw code units instead of raising.
    """
    h = _FNV_OFFSET_BASIS
    for byte in text.encode("utf-8", errors="surrogatepass"):
        h ^= byte
        h = (h * _FNV_PRIME) & 0xFFFFFFFF
    return h


def composite_seed(plate: str, index: int) -> int:
    return stable_hash(f"{plate}|{index}")
