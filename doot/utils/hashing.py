# Doot Hashing Utilities
# Content fingerprints for change detection

import hashlib


def content_hash(content: bytes) -> str:
    """SHA-256 hex digest of file content."""
    return hashlib.sha256(content).hexdigest()
