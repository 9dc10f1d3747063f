"""Content hashing for snap request payloads."""

import hashlib
import uuid
from collections.abc import Callable


def _random_nonce() -> str:
    return uuid.uuid4().hex


class ContentHasher:
    """Fingerprints serialized payloads so the service can de-duplicate them."""

    def __init__(self, nonce_factory: Callable[[], str] = _random_nonce) -> None:
        self._nonce_factory = nonce_factory

    def digest(self, payload: str, dedup_exempt: bool = False) -> str:
        """
        Hash a serialized payload.

        Args:
            payload: Canonical JSON string
            dedup_exempt: Mix a nonce into the input so identical payloads
                never share a hash

        Returns:
            Hex digest
        """
        data = payload + self._nonce_factory() if dedup_exempt else payload
        return hashlib.md5(data.encode("utf-8")).hexdigest()
