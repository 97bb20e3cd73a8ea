import hashlib
import logging
from collections.abc import Mapping
from typing import Any

# Create the library logger
logger = logging.getLogger("lazyaws")

# Add NullHandler to prevent "No handlers could be found" warnings
# if the application doesn't configure logging.
logger.addHandler(logging.NullHandler())


def redact_key(key: Mapping[str, Any] | str | None) -> str:
    """
    Redacts a continuation key for logging.
    Hashes the values so pages can be correlated without revealing item data.
    """
    if key is None:
        return "<none>"
    try:
        if isinstance(key, Mapping):
            redacted = {}
            for k, v in sorted(key.items()):
                val_str = repr(v).encode("utf-8")
                redacted[k] = hashlib.sha256(val_str).hexdigest()[:8]
            return str(redacted)
        return hashlib.sha256(str(key).encode("utf-8")).hexdigest()[:8]
    except Exception:
        return "<redaction_failed>"
