"""Barcode normalization.

Scanners and catalog data disagree about zero-padding numeric codes: the
shop might store ``0123`` while the scanner reports ``123``, or the other
way round. Matching tries the raw value first, then the same value with a
single leading zero toggled.
"""

from __future__ import annotations


def normalize_candidates(raw: str) -> list[str]:
    """Return the lookup keys to try for a scanned value, in order."""
    code = raw.strip()
    if not code:
        return []
    candidates = [code]
    if code.isascii() and code.isdigit():
        if code.startswith("0") and len(code) > 1:
            candidates.append(code[1:])
        else:
            candidates.append("0" + code)
    return candidates
