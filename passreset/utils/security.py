"""Security utilities for secret comparison.

Comparing a presented secret with ``==`` returns as soon as the first
character differs, so response times leak how long a correct prefix is.
`constant_time_equals` hashes both sides under a per-process key and compares
the fixed-length digests with `hmac.compare_digest`, which makes the work
independent of where the inputs differ and of whether their lengths match.
"""

import hashlib
import hmac
import secrets

_COMPARISON_KEY = secrets.token_bytes(32)


def _digest(value: str) -> bytes:
    return hmac.new(_COMPARISON_KEY, value.encode("utf-8", "surrogatepass"), hashlib.sha256).digest()


def constant_time_equals(expected: str, presented: str) -> bool:
    """Compare two strings without leaking timing information.

    Args:
        expected: The trusted, stored secret
        presented: The untrusted value supplied by a caller

    Returns:
        bool: True only if both are strings with identical content. Any other
        input, including ``None`` or bytes, yields False rather than raising.

    Security:
        - Both inputs go through HMAC-SHA256, so a length mismatch costs the
          same as a content mismatch
        - Non-ASCII input is UTF-8 encoded instead of being rejected, unlike
          `secrets.compare_digest` on ``str``
    """
    if not isinstance(expected, str) or not isinstance(presented, str):
        return False
    return hmac.compare_digest(_digest(expected), _digest(presented))
