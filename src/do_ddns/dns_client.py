"""
DigitalOcean DNS client.

This module finds one DNS record through the DigitalOcean API v2 and
points it at a new value.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import httpx
from pydantic import ValidationError
from starlette import status as st_status

from do_ddns.exceptions import (
    ProviderAuthError,
    ProviderError,
    ProviderLookupError,
    ProviderUpdateError,
    RecordNotFoundError,
)
from do_ddns.http_client import open_client
from do_ddns.models import DomainRecord, DomainRecordsPage, RecordUpdate

if TYPE_CHECKING:
    from typing import Final


# DigitalOcean API base URL
DO_API_BASE: Final[str] = "https://api.digitalocean.com/v2"

# Page size requested from the records listing
RECORDS_PER_PAGE: Final[int] = 200


logger = logging.getLogger(__name__)


class DigitalOceanClient:
    """
    DigitalOcean DNS client.

    Parameters
    ----------
    api_base : str, optional
        The API base URL.
    client : httpx.Client | None, optional
        HTTP client to use. A short-lived client is created per call if None.
    """

    def __init__(
        self,
        api_base: str = DO_API_BASE,
        client: httpx.Client | None = None,
    ) -> None:
        self.api_base = api_base.rstrip("/")
        self._client = client

    def update(
        self,
        token: str,
        domain: str,
        subdomain: str,
        record_type: str,
        value: str,
        ttl: int,
        *,
        skip_unchanged: bool = False,
    ) -> bool:
        """
        Point an existing DNS record at a new value.

        The first record of the domain whose type and name match is updated
        with the given value and TTL. Records are never created.

        Parameters
        ----------
        token : str
            DigitalOcean API token.
        domain : str
            The managed domain (e.g., "example.com").
        subdomain : str
            The record name (e.g., "www").
        record_type : str
            The record type (e.g., "A").
        value : str
            The value to set.
        ttl : int
            Time to live in seconds.
        skip_unchanged : bool, optional
            Do not send the update when the record already holds the value
            and TTL.

        Returns
        -------
        bool
            True if the record holds the value afterwards.
        """
        if not token:
            logger.error("DigitalOcean API token is empty.")
            return False

        headers = {"Authorization": f"Bearer {token}"}

        try:
            with open_client(self._client) as client:
                record = self._find_record(
                    client,
                    headers,
                    domain,
                    subdomain,
                    record_type,
                )
                logger.debug(
                    "Found record %d (%s %s -> %s, ttl %s).",
                    record.id,
                    record.type,
                    record.name,
                    record.data,
                    record.ttl,
                )

                if skip_unchanged and record.data == value and record.ttl == ttl:
                    logger.info(
                        "DNS record %s %s already points at %s.",
                        record_type,
                        subdomain,
                        value,
                    )
                    return True

                self._update_record(client, headers, domain, record.id, value, ttl)

        except ProviderAuthError as e:
            logger.error("%s", e)  # noqa: TRY400
            logger.error(
                "Invalid DigitalOcean API token. Please check your configuration.",
            )
            return False
        except ProviderError as e:
            logger.error("%s", e)  # noqa: TRY400
            return False

        logger.info("DNS record updated successfully.")
        return True

    def _find_record(
        self,
        client: httpx.Client,
        headers: dict[str, str],
        domain: str,
        subdomain: str,
        record_type: str,
    ) -> DomainRecord:
        """
        Find the first record matching type and name.

        Pagination links are followed while they stay on the API host.

        Parameters
        ----------
        client : httpx.Client
            HTTP client.
        headers : dict[str, str]
            Request headers.
        domain : str
            The managed domain.
        subdomain : str
            The record name.
        record_type : str
            The record type.

        Returns
        -------
        DomainRecord
            The matching record.

        Raises
        ------
        ProviderAuthError
            If the token is rejected.
        ProviderLookupError
            If a page cannot be fetched or parsed.
        RecordNotFoundError
            If no record matches.
        """
        url = f"{self.api_base}/domains/{domain}/records"
        params: dict[str, int] | None = {"per_page": RECORDS_PER_PAGE}
        seen: set[str] = set()

        while True:
            page = self._get_records_page(client, headers, url, params)
            record = page.find(record_type, subdomain)
            if record is not None:
                return record

            seen.add(url)
            next_url = page.next_url
            if next_url is None or next_url in seen:
                break
            if not self._is_api_url(next_url):
                logger.warning(
                    "Not following pagination link outside the API: '%s'.",
                    next_url,
                )
                break

            url = next_url
            params = None

        msg = (
            f"DNS record not found ({record_type} {subdomain} in {domain}). "
            "Make sure the domain and subdomain exist in your DigitalOcean account."
        )
        raise RecordNotFoundError(msg)

    def _get_records_page(
        self,
        client: httpx.Client,
        headers: dict[str, str],
        url: str,
        params: dict[str, int] | None,
    ) -> DomainRecordsPage:
        """
        Fetch one page of the domain records listing.

        Parameters
        ----------
        client : httpx.Client
            HTTP client.
        headers : dict[str, str]
            Request headers.
        url : str
            Page URL.
        params : dict[str, int] | None
            Query parameters.

        Returns
        -------
        DomainRecordsPage
            The parsed page.

        Raises
        ------
        ProviderAuthError
            If the response status is 401.
        ProviderLookupError
            On transport errors, other non-200 responses or unparseable bodies.
        """
        try:
            response = client.get(url, headers=headers, params=params)
        except httpx.InvalidURL as e:
            msg = f"Invalid DigitalOcean API URL for domain records: '{e}'"
            raise ProviderLookupError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Failed to connect to DigitalOcean API: '{e}'"
            raise ProviderLookupError(msg) from e

        logger.debug("GET %s -> %d", url, response.status_code)

        if response.status_code != st_status.HTTP_200_OK:
            msg = (
                f"DigitalOcean API error (status {response.status_code}): "
                f"'{response.text}'"
            )
            if response.status_code == st_status.HTTP_401_UNAUTHORIZED:
                raise ProviderAuthError(msg, response.status_code, response.text)
            raise ProviderLookupError(msg, response.status_code, response.text)

        try:
            return DomainRecordsPage.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            msg = f"Failed to parse domain records: {e}"
            raise ProviderLookupError(msg, response.status_code, response.text) from e

    def _update_record(
        self,
        client: httpx.Client,
        headers: dict[str, str],
        domain: str,
        record_id: int,
        value: str,
        ttl: int,
    ) -> None:
        """
        Send the record update.

        Parameters
        ----------
        client : httpx.Client
            HTTP client.
        headers : dict[str, str]
            Request headers.
        domain : str
            The managed domain.
        record_id : int
            The record ID.
        value : str
            The new value.
        ttl : int
            The new TTL.

        Raises
        ------
        ProviderUpdateError
            On transport errors or non-200 responses.
        """
        url = f"{self.api_base}/domains/{domain}/records/{record_id}"
        payload = RecordUpdate(data=value, ttl=ttl).model_dump_json()

        try:
            response = client.put(
                url,
                headers={**headers, "Content-Type": "application/json"},
                content=payload,
            )
        except httpx.InvalidURL as e:
            msg = f"Invalid DigitalOcean API URL for record update: '{e}'"
            raise ProviderUpdateError(msg) from e
        except httpx.HTTPError as e:
            msg = f"Error during update request: '{e}'"
            raise ProviderUpdateError(msg) from e

        logger.debug("PUT %s -> %d", url, response.status_code)

        if response.status_code != st_status.HTTP_200_OK:
            msg = (
                f"Failed to update DNS record. Status: {response.status_code}, "
                f"Response: '{response.text}'"
            )
            raise ProviderUpdateError(msg, response.status_code, response.text)

    def _is_api_url(self, url: str) -> bool:
        """Check that a URL points at the API host."""
        try:
            candidate = httpx.URL(url)
        except httpx.InvalidURL:
            return False
        base = httpx.URL(self.api_base)
        return candidate.scheme == base.scheme and candidate.host == base.host
