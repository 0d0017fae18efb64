"""Receiver-side webhook signature verification.

Small utility for webhook receivers to verify that incoming webhook
payloads were signed by Automa.  Uses HMAC-SHA256 over the compact JSON
serialization of the payload, with the webhook secret as the key.

Usage::

    from automa import verify_webhook

    payload = await request.json()
    signature = request.headers["webhook-signature"]

    if verify_webhook(secret, signature, payload):
        # payload is authentic
        ...

The payload is re-serialized before hashing, so it must serialize to
exactly the bytes the sender signed.  Payloads that are equal as values
but formatted differently by the sender will not verify.
"""

from __future__ import annotations

import hashlib
import hmac
import json
from typing import TypeVar

P = TypeVar("P")


def _serialize(payload: object) -> bytes:
    # Same bytes as JSON.stringify: no whitespace, non-ASCII left as-is.
    # NaN and Infinity have no JSON form and are rejected with ValueError
    return json.dumps(payload, separators=(",", ":"), ensure_ascii=False, allow_nan=False).encode("utf-8")


def generate_webhook_signature(secret: str, payload: P) -> str:
    """Compute the hex HMAC-SHA256 signature of *payload* keyed by *secret*.

    Raises ``TypeError`` if *payload* is not JSON-serializable and
    ``ValueError`` if it contains NaN or an infinite float.
    """
    mac = hmac.new(secret.encode("utf-8"), _serialize(payload), hashlib.sha256)
    return mac.hexdigest()


def verify_webhook(secret: str, signature: str, payload: P) -> bool:
    """Verify an HMAC-SHA256 webhook signature.

    Args:
        secret: The webhook secret shared with Automa.
        signature: The hex digest sent along with the webhook.
        payload: The decoded webhook body.

    Returns:
        ``True`` if the signature is valid, ``False`` otherwise.  Never
        raises: empty or non-string inputs and unserializable payloads
        are all reported as ``False``.  The digests are compared with
        ``hmac.compare_digest`` after a length check.
    """
    if not isinstance(secret, str) or not secret:
        return False
    if not isinstance(signature, str) or not signature:
        return False

    try:
        expected = generate_webhook_signature(secret, payload)
    except (TypeError, ValueError):
        return False

    digest = expected.encode("utf-8")
    checksum = signature.encode("utf-8")
    if len(digest) != len(checksum):
        return False
    return hmac.compare_digest(digest, checksum)
