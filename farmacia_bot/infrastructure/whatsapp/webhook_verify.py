from __future__ import annotations

import hashlib
import hmac
import logging


logger = logging.getLogger(__name__)

_ALGORITHMS = {"sha512": hashlib.sha512, "sha256": hashlib.sha256}


def verify_post_signature(
    body: bytes,
    signature_header: str | None,
    algorithm_header: str | None,
    secret: str | None,
    env: str,
) -> bool:
    """Check WAHA's X-Webhook-Hmac header (hex digest of the raw body)."""
    if not secret:
        if env.lower() in {"dev", "local"}:
            return True
        logger.error("Missing webhook secret for signature verification")
        return False

    if not signature_header:
        if env.lower() in {"dev", "local"}:
            logger.warning("Missing signature header; accepting in dev mode")
            return True
        return False

    digest = _ALGORITHMS.get((algorithm_header or "sha512").lower())
    if digest is None:
        return False

    expected = hmac.new(secret.encode("utf-8"), body, digest).hexdigest()
    return hmac.compare_digest(expected, signature_header.strip())
