"""Remote rendering service access."""

from snapfleet.remote.hashing import ContentHasher
from snapfleet.remote.transport import RequestTransport, is_retryable_status, raise_if_cancelled

__all__ = [
    "ContentHasher",
    "RequestTransport",
    "is_retryable_status",
    "raise_if_cancelled",
]
