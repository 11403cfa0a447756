"""Legacy character flag encodings."""

from __future__ import annotations

ACTIVE = "1"
INACTIVE = "0"
YES = "Y"
NO = "N"


def encode_flag(value: bool, *, yes: str = ACTIVE, no: str = INACTIVE) -> str:
    return yes if value else no


def decode_flag(raw: object, *, yes: str = ACTIVE) -> bool:
    if raw is None:
        return False
    if isinstance(raw, bool):
        return raw
    return str(raw).strip().upper() == yes
