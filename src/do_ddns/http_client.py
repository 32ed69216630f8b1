"""Shared HTTP client settings."""

from __future__ import annotations

from contextlib import nullcontext
from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from contextlib import AbstractContextManager
    from typing import Final


# HTTP timeout in seconds
HTTP_TIMEOUT: Final[float] = 30.0


def open_client(client: httpx.Client | None) -> AbstractContextManager[httpx.Client]:
    """
    Scope an HTTP client for one operation.

    An injected client is used as-is and left open for its owner; otherwise
    a new client is created and closed when the operation ends.

    Parameters
    ----------
    client : httpx.Client | None
        An injected client, or None.

    Returns
    -------
    AbstractContextManager[httpx.Client]
        Context manager yielding the client to use.
    """
    if client is not None:
        return nullcontext(client)
    return httpx.Client(timeout=HTTP_TIMEOUT)
