import hashlib

from collector.errors import FingerprintError


def fingerprint(url: str, title: str) -> str:
    """SHA-256 of "<url>::<title>" as lowercase hex. Used as the dedup key."""
    if not isinstance(url, str) or not isinstance(title, str):
        raise FingerprintError(f"Cannot fingerprint url={url!r} title={title!r}")
    return hashlib.sha256(f"{url}::{title}".encode("utf-8")).hexdigest()
