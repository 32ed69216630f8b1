"""
Data models for DO DDNS Updater.

This module defines the payloads exchanged with the public-IP echo service
and the DigitalOcean DNS API.
"""

from __future__ import annotations

import ipaddress
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class RecordType(StrEnum):
    """
    Common DNS record types.

    The configured record type is kept as a plain string, so values outside
    this enumeration are still matched literally against the provider.

    Attributes
    ----------
    A : str
        IPv4 address record.
    AAAA : str
        IPv6 address record.
    CNAME : str
        Canonical name (alias) record.
    TXT : str
        Text record.
    """

    A = "A"
    AAAA = "AAAA"
    CNAME = "CNAME"
    TXT = "TXT"


class PublicAddress(BaseModel):
    """
    Response body of the public-IP echo service.

    Attributes
    ----------
    ip : str
        The textual IPv4 address as reported by the service.
    """

    ip: str

    @field_validator("ip")
    @classmethod
    def check_ipv4(cls, value: str) -> str:
        """
        Validate that the reported address is a textual IPv4 address.

        Parameters
        ----------
        value : str
            The reported address.

        Returns
        -------
        str
            The address, stripped of surrounding whitespace.

        Raises
        ------
        ValueError
            If the value is not an IPv4 address.
        """
        value = value.strip()
        ipaddress.IPv4Address(value)
        return value


class DomainRecord(BaseModel):
    """
    A DNS record as returned by the DigitalOcean API.

    Only the fields the updater reads are declared; the rest are ignored.

    Attributes
    ----------
    id : int
        Provider record ID.
    type : str
        Record type (A, CNAME, ...).
    name : str
        Host name relative to the domain ("www", "@").
    data : str | None
        Current record value.
    ttl : int | None
        Current TTL in seconds.
    """

    model_config = ConfigDict(extra="ignore")

    id: int
    type: str
    name: str
    data: str | None = None
    ttl: int | None = None


class PageLinks(BaseModel):
    """Pagination links of a list response."""

    model_config = ConfigDict(extra="ignore")

    next: str | None = None
    last: str | None = None


class Links(BaseModel):
    """The "links" object of a list response."""

    model_config = ConfigDict(extra="ignore")

    pages: PageLinks = Field(default_factory=PageLinks)


class DomainRecordsPage(BaseModel):
    """
    One page of the domain records listing.

    Attributes
    ----------
    domain_records : list[DomainRecord]
        Records on this page, in provider order.
    links : Links
        Pagination links.
    """

    model_config = ConfigDict(extra="ignore")

    domain_records: list[DomainRecord] = Field(default_factory=list)
    links: Links = Field(default_factory=Links)

    @property
    def next_url(self) -> str | None:
        """Get the URL of the next page, if any."""
        return self.links.pages.next

    def find(self, record_type: str, name: str) -> DomainRecord | None:
        """
        Find the first record matching a type and name.

        Parameters
        ----------
        record_type : str
            The record type to match.
        name : str
            The record name to match.

        Returns
        -------
        DomainRecord | None
            The first matching record, or None.
        """
        for record in self.domain_records:
            if record.type == record_type and record.name == name:
                return record
        return None


class RecordUpdate(BaseModel):
    """
    Body of the record update request.

    Attributes
    ----------
    data : str
        The new record value.
    ttl : int
        The new TTL in seconds.
    """

    data: str
    ttl: int
