"""ACME DNS client — register accounts and update TXT records via the REST API."""

from __future__ import annotations

import json
import logging
import platform
from collections.abc import Sequence
from dataclasses import replace
from typing import Self

import httpx

from acmedns.errors import ClientError, ConfigurationError, DecodeError, RequestTimeoutError, TransportError
from acmedns.models import Account

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30.0

_UA = "acmedns"


def user_agent() -> str:
    """Return the User-Agent header value: library name, OS and CPU architecture."""
    return f"{_UA} ({platform.system().lower()}; {platform.machine().lower()})"


def _parse_base_url(base_url: str) -> httpx.URL:
    try:
        url = httpx.URL(base_url)
    except (httpx.InvalidURL, TypeError) as exc:
        raise ConfigurationError(f"could not parse base URL {base_url!r}: {exc}") from exc
    if url.scheme not in ("http", "https") or not url.host:
        raise ConfigurationError(f"base URL must be an absolute http(s) URL, got {base_url!r}")
    return url


class Client:
    """Client for a single ACME DNS server.

    The ``timeout`` budget applies separately to connecting (including the TLS
    handshake), waiting for response data, writing and acquiring a pooled
    connection. Requests are never retried.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._base_url = _parse_base_url(base_url)
        self._server_url = base_url
        self._client = _http_client or httpx.Client(timeout=httpx.Timeout(timeout))

    @property
    def base_url(self) -> str:
        return self._server_url

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def _endpoint(self, name: str) -> httpx.URL:
        return self._base_url.copy_with(path=f"{self._base_url.path.rstrip('/')}/{name}")

    def _post(
        self,
        name: str,
        payload: dict | None,
        headers: dict[str, str] | None = None,
        timeout: float | None = None,
    ) -> httpx.Response:
        request_headers = {"Accept": "application/json", "User-Agent": user_agent()}
        if payload is not None:
            request_headers["Content-Type"] = "application/json"
        request_headers.update(headers or {})

        kwargs: dict = {"headers": request_headers}
        if payload is not None:
            kwargs["content"] = json.dumps(payload).encode()
        if timeout is not None:
            kwargs["timeout"] = httpx.Timeout(timeout)

        url = self._endpoint(name)
        try:
            resp = self._client.post(url, **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(f"request to {url} timed out: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"request to {url} failed: {exc}") from exc

        if not resp.is_success:
            raise ClientError("response error", resp.status_code, resp.content)
        return resp

    def register_account(self, allow_from: Sequence[str] | None = None, *, timeout: float | None = None) -> Account:
        """Register a new account with the ACME DNS server.

        Args:
            allow_from: CIDR networks the account may be used from. When empty,
                the ``allowfrom`` field is left out and the server applies no
                restriction.
            timeout: Per-request override of the client timeout budget.

        Returns:
            The issued Account, with ``server_url`` set to this client's base URL.
        """
        payload = {"allowfrom": list(allow_from)} if allow_from else None
        try:
            resp = self._post("register", payload, timeout=timeout)
        except ClientError as exc:
            logger.error("Failed to register account with %s: %s", self._server_url, exc)
            raise

        try:
            account = Account.from_dict(json.loads(resp.content))
        except ValueError as exc:
            raise DecodeError("failed to unmarshal response", resp.status_code, resp.content) from exc

        account = replace(account, server_url=self._server_url)
        logger.info("Registered ACME DNS account %s on %s", account.full_domain, self._server_url)
        return account

    def update_txt_record(self, account: Account, value: str, *, timeout: float | None = None) -> None:
        """Set the TXT record of ``account``'s subdomain to ``value``.

        A 2xx response body is ignored.
        """
        headers = {"X-Api-User": account.username, "X-Api-Key": account.password}
        try:
            self._post(
                "update",
                {"subdomain": account.sub_domain, "txt": value},
                headers=headers,
                timeout=timeout,
            )
        except ClientError as exc:
            logger.error("Failed to update TXT record for %s: %s", account.sub_domain, exc)
            raise
        logger.info("Updated TXT record for %s", account.sub_domain)
