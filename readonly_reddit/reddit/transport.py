"""
Authenticated GET requests against Reddit's OAuth content API.

Transport gates every request through the Throttle, makes sure the
AuthSession holds a usable token, signs the request and validates the
response before handing back its body. It never retries.
"""

import json
import time
from typing import Any, Dict, Mapping, Optional

import requests
import structlog

from readonly_reddit.reddit.auth import DEFAULT_TIMEOUT, AuthSession
from readonly_reddit.reddit.exceptions import (
    DecodeError,
    DecodeErrorReason,
    HTTPError,
)
from readonly_reddit.reddit.http import BodyReadError, media_type, read_body
from readonly_reddit.reddit.throttle import Throttle
from readonly_reddit.utils.logger import log_api_call

logger = structlog.get_logger(__name__)


class Transport:
    """
    Perform signed GET requests and return validated response bodies.

    Example:
        >>> transport = Transport(auth, Throttle(1.0))
        >>> payload = transport.get_json("https://oauth.reddit.com/r/python/hot")
    """

    def __init__(
        self,
        auth: AuthSession,
        throttle: Optional[Throttle] = None,
        timeout: float = DEFAULT_TIMEOUT,
        extra_headers: Optional[Mapping[str, str]] = None,
        logger: Any = logger,
    ) -> None:
        """
        Initialize Transport.

        Args:
            auth: Session providing the bearer token and HTTP session
            throttle: Minimum-interval gate (disabled if omitted)
            timeout: Per-request timeout in seconds
            extra_headers: Headers added to every request, overriding defaults
            logger: Bound structlog logger
        """
        self.auth = auth
        self.throttle = throttle if throttle is not None else Throttle()
        self.timeout = timeout
        self.extra_headers: Dict[str, str] = dict(extra_headers or {})
        self.logger = logger

    @property
    def session(self) -> requests.Session:
        return self.auth.session

    def _headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "*/*",
            "Accept-Encoding": "gzip, deflate",
            "Authorization": self.auth.authorization_header(),
            "Connection": "keep-alive",
            # The API expects this header even on GET requests
            "Content-Type": "application/x-www-form-urlencoded",
            "User-Agent": self.auth.credentials.user_agent,
        }
        headers.update(self.extra_headers)
        return headers

    def get(self, url: str, params: Optional[Mapping[str, str]] = None) -> bytes:
        """
        Send an authenticated GET and return the decompressed body.

        Args:
            url: Absolute request URL
            params: Query parameters

        Returns:
            Response body bytes (at most 1 MiB)

        Raises:
            AuthError: If no usable token can be obtained
            HTTPError: If the status code is not 2xx
            DecodeError: If the content type is not JSON, the transfer
                fails, or the body exceeds the size cap
        """
        self.logger.debug("api_request", url=url, params=dict(params or {}))

        self.throttle.wait()
        self.auth.ensure_valid()

        cookies = None
        cookie = self.auth.store.cookie
        if cookie is not None:
            cookies = {cookie.name: cookie.value}

        start_time = time.perf_counter()
        try:
            response = self.session.get(
                url,
                params=params,
                headers=self._headers(),
                cookies=cookies,
                timeout=self.timeout,
                stream=True,
            )
        except requests.RequestException as e:
            log_api_call(
                self.logger,
                "GET",
                url,
                duration_ms=(time.perf_counter() - start_time) * 1000,
                error=str(e),
            )
            raise DecodeError(
                f"GET {url} failed: {e}",
                reason=DecodeErrorReason.TRANSPORT_FAILURE,
            ) from e

        try:
            body = self._validate(url, response)
        finally:
            response.close()

        log_api_call(
            self.logger,
            "GET",
            url,
            duration_ms=(time.perf_counter() - start_time) * 1000,
            status_code=response.status_code,
            bytes=len(body),
        )
        return body

    def get_json(self, url: str, params: Optional[Mapping[str, str]] = None) -> Any:
        """
        Send an authenticated GET and parse the body as JSON.

        Raises:
            DecodeError: With reason MALFORMED_PAYLOAD if the body is not
                valid JSON, plus everything get() raises
        """
        body = self.get(url, params)
        try:
            return json.loads(body)
        except ValueError as e:
            raise DecodeError(
                f"cannot parse response of {url}: {e}",
                reason=DecodeErrorReason.MALFORMED_PAYLOAD,
            ) from e

    def _validate(self, url: str, response: requests.Response) -> bytes:
        status = response.status_code
        if status < 200 or status > 299:
            self.logger.warning("api_request_rejected", url=url, status_code=status)
            raise HTTPError(
                status,
                f"cannot do get request, status: {status} {response.reason or ''}".rstrip(),
            )

        content_type = media_type(response)
        if content_type != "application/json":
            raise DecodeError(
                f"unknown response content type: {content_type}",
                reason=DecodeErrorReason.UNEXPECTED_CONTENT_TYPE,
            )

        try:
            return read_body(response)
        except BodyReadError as e:
            reason = (
                DecodeErrorReason.MALFORMED_PAYLOAD
                if e.too_large
                else DecodeErrorReason.TRANSPORT_FAILURE
            )
            raise DecodeError(str(e), reason=reason) from e
