"""Exception hierarchy for DO DDNS Updater."""

from __future__ import annotations


class DDNSError(Exception):
    """Base exception for DO DDNS Updater errors."""


class ConfigError(DDNSError):
    """The configuration file could not be created or read."""


class PublicIPError(DDNSError):
    """The public IP address could not be determined."""


class ProviderError(DDNSError):
    """
    A DigitalOcean API call failed.

    Attributes
    ----------
    status_code : int | None
        HTTP status of the failed response, if one was received.
    body : str | None
        Response body of the failed response, if one was received.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ) -> None:
        """
        Initialize ProviderError.

        Parameters
        ----------
        message : str
            Human-readable error message.
        status_code : int | None, optional
            HTTP status code.
        body : str | None, optional
            Response body.
        """
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ProviderAuthError(ProviderError):
    """The provider rejected the API token."""


class ProviderLookupError(ProviderError):
    """The domain records could not be listed or parsed."""


class RecordNotFoundError(ProviderLookupError):
    """No record matches the configured type and name."""


class ProviderUpdateError(ProviderError):
    """The record update request was rejected."""
