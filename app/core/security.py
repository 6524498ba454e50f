"""Auth key checks. The key is an opaque SHA-256 hex digest computed on the device."""
import hashlib
import re

HEX_RE = re.compile(r"[0-9a-fA-F]+")


def is_valid_auth_key(value: str | None, length: int = 64) -> bool:
    """True when value is exactly `length` hex characters. Provenance is not checked."""
    if not value or len(value) != length:
        return False
    return HEX_RE.fullmatch(value) is not None


def key_fingerprint(auth_key: str) -> str:
    """Short, non-reversible tag for log lines; raw keys never reach the logs."""
    return hashlib.sha256(auth_key.encode("utf-8")).hexdigest()[:12]
