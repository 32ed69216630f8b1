"""
Public IP probe.

This module asks an echo service for the host's current public IPv4 address.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError

from do_ddns.exceptions import PublicIPError
from do_ddns.http_client import open_client
from do_ddns.models import PublicAddress

if TYPE_CHECKING:
    from typing import Final


# ipify echo service
IPIFY_URL: Final[str] = "https://api.ipify.org?format=json"


logger = logging.getLogger(__name__)


class PublicIPProbe:
    """
    Fetches the current public IPv4 address from ipify.

    Parameters
    ----------
    url : str, optional
        The echo service URL.
    client : httpx.Client | None, optional
        HTTP client to use. A short-lived client is created per call if None.
    """

    def __init__(self, url: str = IPIFY_URL, client: httpx.Client | None = None) -> None:
        self.url = url
        self._client = client

    def current(self) -> str:
        """
        Get the current public IPv4 address.

        Returns
        -------
        str
            The address, or an empty string if it could not be determined.
        """
        try:
            return self._fetch()
        except PublicIPError as e:
            logger.error("Failed to get public IP: %s", e)  # noqa: TRY400
            return ""

    def _fetch(self) -> str:
        """
        Query the echo service.

        Returns
        -------
        str
            The reported address.

        Raises
        ------
        PublicIPError
            On transport errors, non-2xx responses or unparseable bodies.
        """
        with open_client(self._client) as client:
            try:
                response = client.get(self.url)
            except (httpx.HTTPError, httpx.InvalidURL) as e:
                msg = f"request failed: '{e}'"
                raise PublicIPError(msg) from e

            logger.debug("GET %s -> %d", self.url, response.status_code)

            if not response.is_success:
                msg = f"status {response.status_code}: '{response.text}'"
                raise PublicIPError(msg)

            try:
                address = PublicAddress.model_validate(response.json())
            except (ValueError, ValidationError) as e:
                msg = f"unexpected response '{response.text}'"
                raise PublicIPError(msg) from e

        return address.ip
