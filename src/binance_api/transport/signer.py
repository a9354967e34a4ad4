"""
HMAC-SHA256 request signing.

The signature covers the encoded parameters with ``timestamp`` and ``recvWindow``
appended, exactly as they are transmitted. The ``signature`` parameter itself is
appended last and is not part of its own input.
"""

import hashlib
import hmac
import time

from binance_api.exceptions import SigningError

DEFAULT_RECV_WINDOW = 5000


def get_timestamp_ms() -> int:
    """Current time in milliseconds since the Unix epoch."""
    return int(time.time() * 1000)


class Signer:
    """
    Signs encoded request payloads with the API secret.

    A fresh HMAC object is created for every signature, so one Signer can be
    shared between concurrent requests.
    """

    def __init__(self, secret: str):
        self._secret = secret.encode("utf-8")

    def __repr__(self) -> str:
        return "Signer(secret=***)"

    def signature(self, message: str) -> str:
        """Lowercase hex HMAC-SHA256 of message."""
        try:
            return hmac.new(self._secret, message.encode("utf-8"), hashlib.sha256).hexdigest()
        except (TypeError, ValueError) as e:
            raise SigningError(f"Failed to compute signature: {e}") from e

    def sign(self, payload: str, timestamp_ms: int, recv_window_ms: int = DEFAULT_RECV_WINDOW) -> str:
        """
        Append timestamp, recvWindow and signature to an encoded payload.

        Args:
            payload: Encoded request parameters, may be empty
            timestamp_ms: Request timestamp in milliseconds
            recv_window_ms: Server tolerance for clock skew in milliseconds

        Returns:
            Payload ready to be sent, ending with ``&signature=<hex>``
        """
        auth_params = f"timestamp={timestamp_ms}&recvWindow={recv_window_ms}"
        signed_payload = f"{payload}&{auth_params}" if payload else auth_params
        return f"{signed_payload}&signature={self.signature(signed_payload)}"
