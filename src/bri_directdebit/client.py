"""
BRI client — configuration and the signed HTTP transport for the BRI API.

The client holds credentials, timeouts and logging settings, and sends
prepared requests with a small retry loop. Direct Debit operations live in
``bri_directdebit.direct_debit`` and are built on top of it.

Usage:
    from bri_directdebit import Client, DirectDebitClient

    client = Client(
        direct_debit_base_url="https://sandbox.partner.api.bri.co.id",
        client_id="...",
        client_secret="...",
    )
    dd = DirectDebitClient(client)

    res = dd.create_card_token_otp(access_token, {
        "body": {"cardPan": "5221849000000138", "phoneNumber": "081234567890"},
    })
    print(res.card_token)
"""

import os
import random
import time
from urllib.parse import urlsplit

import requests

from bri_directdebit import log
from bri_directdebit.endpoints import Endpoints, endpoints_for
from bri_directdebit.errors import (
    BRIError,
    DecodeError,
    EmptyResponse,
    InvalidURL,
    PendingTransaction,
    ReadError,
    RemoteError,
    RequestBuildError,
    RequestCancelled,
    TransportError,
)
from bri_directdebit.signature import get_timestamp

DEFAULT_TIMEOUT = 180.0  # seconds
DEFAULT_LOG_LEVEL = log.INFO

# Retry policy for transport-level failures. HTTP statuses are never retried.
DEFAULT_RETRY_COUNT = 3
BACKOFF_INTERVAL = 0.002
MAX_JITTER_INTERVAL = 0.005

READ_CHUNK_SIZE = 8192

HTTP_METHODS = frozenset({"GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"})

_TRUTHY = ("1", "true", "yes")


class Client:
    """Configuration plus the retrying transport shared by every operation.

    Treat an instance as read-only once constructed; it can then be shared
    across threads. ``log_level``:

        0: no logging
        1: errors only
        2: errors + informational (default)
        3: errors + informational + debug
    """

    def __init__(
        self,
        base_url: str = "",
        direct_debit_base_url: str = "",
        client_id: str = "",
        client_secret: str = "",
        api_key: str = "",
        timeout: float = DEFAULT_TIMEOUT,
        log_level: int = DEFAULT_LOG_LEVEL,
        logger: log.Sink = None,
        is_production: bool = False,
        clock=None,
        session: requests.Session = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.direct_debit_base_url = direct_debit_base_url.rstrip("/")
        self.client_id = client_id
        self.client_secret = client_secret
        self.api_key = api_key
        self.timeout = timeout
        self.log_level = log_level
        self.logger = logger or log.StreamSink()
        self.is_production = is_production
        self.clock = clock or get_timestamp
        self.retry_count = DEFAULT_RETRY_COUNT
        self.session = session or requests.Session()
        self.endpoints: Endpoints = endpoints_for(sandbox=not is_production)

    @classmethod
    def from_env(cls, **overrides) -> "Client":
        """Build a client from ``BRI_*`` environment variables.

        Keyword arguments take precedence over the environment.
        """
        env = os.environ
        config = {
            "base_url": env.get("BRI_BASE_URL", ""),
            "direct_debit_base_url": env.get("BRI_DIRECT_DEBIT_BASE_URL", ""),
            "client_id": env.get("BRI_CLIENT_ID", ""),
            "client_secret": env.get("BRI_CLIENT_SECRET", ""),
            "api_key": env.get("BRI_API_KEY", ""),
            "is_production": env.get("BRI_PRODUCTION", "").lower() in _TRUTHY,
        }
        if env.get("BRI_TIMEOUT"):
            config["timeout"] = float(env["BRI_TIMEOUT"])
        if env.get("BRI_LOG_LEVEL"):
            config["log_level"] = int(env["BRI_LOG_LEVEL"])
        config.update(overrides)
        return cls(**config)

    def use_sandbox_prefix(self, use: bool) -> None:
        """Route Direct Debit calls to the ``/sandbox`` or ``rt-`` paths.

        The whole endpoint table is replaced in one assignment. Call this
        during setup only, not while requests are in flight.
        """
        self.endpoints = endpoints_for(sandbox=use)

    def _log(self, level: int, *parts) -> None:
        if self.log_level >= level:
            self.logger.write(level, " ".join(str(p) for p in parts))

    def _fail(self, err: BRIError) -> BRIError:
        self._log(log.ERROR, "Request failed:", err)
        return err

    # --- HTTP ---

    def new_request(self, method: str, full_path: str, headers: dict = None, body=None) -> requests.PreparedRequest:
        """Build a prepared request with ``headers`` applied.

        Raises:
            RequestBuildError: Unknown method or malformed URL.
        """
        if method not in HTTP_METHODS:
            err = RequestBuildError(f"invalid HTTP method {method!r}")
            self._log(log.ERROR, "Request creation failed:", err)
            raise err

        if isinstance(body, str):
            body = body.encode("utf-8")
        try:
            return requests.Request(method, full_path, headers=headers or {}, data=body).prepare()
        except (ValueError, requests.RequestException) as e:
            self._log(log.ERROR, "Request creation failed:", e)
            raise RequestBuildError(f"cannot build request: {e}") from e

    def _backoff(self, cancel) -> None:
        delay = BACKOFF_INTERVAL + random.uniform(0, MAX_JITTER_INTERVAL)
        if cancel is None:
            time.sleep(delay)
        elif cancel.wait(delay):
            raise RequestCancelled("request cancelled")

    def _send(self, request: requests.PreparedRequest, deadline: float, cancel=None) -> requests.Response:
        """Send with retry on transport errors only.

        Each attempt gets whatever is left of the call's ``timeout`` budget;
        no attempt starts once it is spent.
        """
        settings = self.session.merge_environment_settings(request.url, {}, True, None, None)
        last_error = None
        for attempt in range(1, self.retry_count + 1):
            if cancel is not None and cancel.is_set():
                raise self._fail(RequestCancelled("request cancelled"))
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                self._log(log.ERROR, f"Cannot send request: timeout of {self.timeout}s exceeded")
                raise TransportError(
                    f"cannot send request: timeout of {self.timeout}s exceeded", attempts=attempt - 1,
                ) from last_error
            try:
                return self.session.send(request, timeout=remaining, **settings)
            except requests.RequestException as e:
                last_error = e
                self._log(log.DEBUG, f"Attempt {attempt}/{self.retry_count} failed:", e)
            if attempt < self.retry_count:
                try:
                    self._backoff(cancel)
                except RequestCancelled as e:
                    raise self._fail(e)

        self._log(log.ERROR, "Cannot send request:", last_error)
        raise TransportError(f"cannot send request: {last_error}", attempts=self.retry_count) from last_error

    def _read(self, response: requests.Response, deadline: float) -> bytes:
        """Drain the body, giving up once ``deadline`` has passed."""
        chunks = []
        try:
            for chunk in response.iter_content(READ_CHUNK_SIZE):
                chunks.append(chunk)
                if time.monotonic() > deadline:
                    err = ReadError(f"response body not read within {self.timeout}s", response.status_code)
                    self._log(log.ERROR, "Cannot read response body:", err)
                    raise err
        except requests.RequestException as e:
            self._log(log.ERROR, "Cannot read response body:", e)
            raise ReadError(f"cannot read response body: {e}", response.status_code) from e
        return b"".join(chunks)

    def execute(self, request: requests.PreparedRequest, decode=None, decode_error=None, cancel=None):
        """Send ``request`` and decode the response.

        Args:
            request: A request from ``new_request``.
            decode: Callable turning the raw body into the success record; it
                must raise DecodeError when the body does not match. When
                omitted the body is not decoded and None is returned.
            decode_error: Optional callable for the error record, tried when
                ``decode`` fails.
            cancel: Optional ``threading.Event``; setting it aborts retries.

        Returns:
            Whatever ``decode`` returned.

        Raises:
            TransportError, RequestCancelled, ReadError, InvalidURL,
            EmptyResponse, PendingTransaction, RemoteError, DecodeError.
        """
        url = urlsplit(request.url)
        self._log(log.INFO, f"Request {request.method}:", url.netloc, url.path)

        start = time.monotonic()
        deadline = start + self.timeout
        response = self._send(request, deadline, cancel)
        try:
            self._log(log.DEBUG, f"Completed in {time.monotonic() - start:.3f}s")
            raw = self._read(response, deadline)
        finally:
            response.close()

        status = response.status_code
        self._log(log.DEBUG, "BRI HTTP status response:", status)
        self._log(log.DEBUG, "BRI body response:", raw.decode("utf-8", errors="replace"))

        if status == 404:
            raise self._fail(InvalidURL(raw))
        if status == 204:
            raise self._fail(EmptyResponse(raw))
        if decode is None:
            return None

        try:
            return decode(raw)
        except DecodeError as e:
            last_error = e

        payload = None
        if decode_error is not None:
            try:
                payload = decode_error(raw)
            except DecodeError as e:
                last_error = e

        if status == 200:
            raise self._fail(PendingTransaction(raw, payload))
        if payload is not None:
            raise self._fail(RemoteError(status, raw, payload))
        last_error.status_code = status
        last_error.body = raw
        raise self._fail(last_error)

    def call(self, method: str, full_path: str, headers: dict = None, body=None, decode=None, decode_error=None, cancel=None):
        """Build and execute a request in one step."""
        request = self.new_request(method, full_path, headers, body)
        return self.execute(request, decode, decode_error, cancel)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
