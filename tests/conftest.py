"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

from __future__ import annotations

import json
from typing import Any

import httpx
import pytest

from do_ddns.dns_client import DO_API_BASE, DigitalOceanClient
from do_ddns.public_ip import PublicIPProbe


class FakeServices:
    """
    In-memory stand-in for ipify and the DigitalOcean DNS API.

    Attributes
    ----------
    ip_status : int
        Status returned by the echo service.
    ip_body : Any
        Body returned by the echo service (dict as JSON, str as text).
    records_status : int
        Status returned by the records listing.
    records_body : str | None
        Raw body of the records listing, overriding `pages` when set.
    pages : list[list[dict]]
        Records per listing page.
    put_status : int
        Status returned by the update request.
    requests : list[httpx.Request]
        Every request received, in order.
    """

    def __init__(self) -> None:
        self.ip_status = 200
        self.ip_body: Any = {"ip": "203.0.113.5"}
        self.records_status = 200
        self.records_body: str | None = None
        self.pages: list[list[dict[str, Any]]] = [[]]
        self.put_status = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.host == "api.ipify.org":
            if isinstance(self.ip_body, dict):
                return httpx.Response(self.ip_status, json=self.ip_body)
            return httpx.Response(self.ip_status, text=self.ip_body)

        if request.url.host == "api.digitalocean.com":
            if request.method == "GET":
                return self._records(request)
            if request.method == "PUT":
                if self.put_status != 200:
                    return httpx.Response(
                        self.put_status,
                        json={"id": "unprocessable_entity", "message": "bad data"},
                    )
                return httpx.Response(
                    200,
                    json={"domain_record": json.loads(request.content)},
                )

        return httpx.Response(404, json={"id": "not_found"})

    def _records(self, request: httpx.Request) -> httpx.Response:
        if self.records_status != 200:
            body = {"id": "unauthorized", "message": "Unable to authenticate you"}
            if self.records_status != 401:
                body = {"id": "server_error", "message": "Something went wrong"}
            return httpx.Response(self.records_status, json=body)

        if self.records_body is not None:
            return httpx.Response(200, text=self.records_body)

        page = int(request.url.params.get("page", "1"))
        domain = request.url.path.split("/")[3]
        data: dict[str, Any] = {
            "domain_records": self.pages[page - 1],
            "links": {},
            "meta": {"total": sum(len(p) for p in self.pages)},
        }
        if page < len(self.pages):
            data["links"] = {
                "pages": {
                    "next": f"{DO_API_BASE}/domains/{domain}/records?page={page + 1}&per_page=200",
                },
            }
        return httpx.Response(200, json=data)

    def by_method(self, method: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method]

    @property
    def provider_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == "api.digitalocean.com"]


@pytest.fixture
def services():
    """Provide fake HTTP services."""
    return FakeServices()


@pytest.fixture
def http_client(services):
    """Provide an HTTP client routed to the fake services."""
    client = httpx.Client(transport=httpx.MockTransport(services.handler))
    yield client
    client.close()


@pytest.fixture
def probe(http_client):
    """Provide a public IP probe using the fake services."""
    return PublicIPProbe(client=http_client)


@pytest.fixture
def dns_client(http_client):
    """Provide a DigitalOcean client using the fake services."""
    return DigitalOceanClient(client=http_client)
