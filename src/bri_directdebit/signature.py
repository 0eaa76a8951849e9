"""
Request signing for the BRI API.

Every call carries a ``BRI-Timestamp`` and a ``BRI-Signature`` header. The
signature is an HMAC-SHA256 over a canonical payload built from the request
path, HTTP verb, bearer token, timestamp and raw JSON body, keyed with the
client secret and base64 encoded:

    path=/v1/rt-directdebit/tokens&verb=POST&token=Bearer abc&timestamp=...&body={...}

Both functions here are pure. The signer never reads the clock; callers pass
the same timestamp they put on the wire.
"""

import base64
import hashlib
import hmac
from datetime import datetime, timezone

# Seconds part of the header value; milliseconds and the Z suffix are appended.
BRI_TIME_FORMAT = "%Y-%m-%dT%H:%M:%S"


def get_timestamp(now: datetime = None) -> str:
    """Format ``now`` (default: current UTC time) for the BRI-Timestamp header.

    Milliseconds are kept with trailing zeros trimmed; a whole second drops
    the fractional part entirely (``2021-01-01T00:00:00Z``). A naive ``now``
    is taken to already be UTC; aware values are converted.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    else:
        now = now.astimezone(timezone.utc)

    millis = f"{now.microsecond // 1000:03d}".rstrip("0")
    base = now.strftime(BRI_TIME_FORMAT)
    if millis:
        return f"{base}.{millis}Z"
    return f"{base}Z"


def signature_payload(path: str, verb: str, token: str, timestamp: str, body: str) -> str:
    return f"path={path}&verb={verb}&token={token}&timestamp={timestamp}&body={body}"


def generate_signature(path: str, verb: str, token: str, timestamp: str, body: str, secret: str) -> str:
    """Sign a request for the ``BRI-Signature`` header.

    Args:
        path: Endpoint path only, no scheme, host or query (``/v1/...``).
        verb: Uppercase HTTP method.
        token: Access token already prefixed with ``Bearer ``.
        timestamp: The exact ``BRI-Timestamp`` header value.
        body: The exact JSON body sent on the wire, ``""`` if none.
        secret: Client secret issued by BRI.

    Returns:
        Base64-encoded HMAC-SHA256 digest.
    """
    payload = signature_payload(path, verb, token, timestamp, body)
    digest = hmac.new(secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256).digest()
    return base64.b64encode(digest).decode("ascii")
