"""
Update loop for DO DDNS Updater.

Each cycle re-reads the configuration, probes the public IP and updates the
DNS record, then sleeps for a fixed delay. Every failure is retried on the
next cycle.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from do_ddns.config import DEFAULT_ENV_PATH, load_config
from do_ddns.dns_client import DigitalOceanClient
from do_ddns.models import RecordType
from do_ddns.public_ip import PublicIPProbe

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path
    from typing import Final


# Delay before re-reading a configuration without token, in seconds
TOKEN_RETRY_DELAY: Final[float] = 60.0

# Delay between update cycles, in seconds
UPDATE_INTERVAL: Final[float] = 300.0


logger = logging.getLogger(__name__)


class CycleResult:
    """
    Outcome of one update cycle.

    Attributes
    ----------
    success : bool
        Whether the record was updated.
    delay : float
        Seconds to wait before the next cycle.
    ip : str
        The public IP address found, or an empty string.
    """

    def __init__(self, *, success: bool, delay: float, ip: str = "") -> None:
        self.success = success
        self.delay = delay
        self.ip = ip


class Updater:
    """
    Keeps the configured DNS record on the current public IP.

    Parameters
    ----------
    env_path : Path, optional
        Path to the ".env" configuration file.
    probe : PublicIPProbe | None, optional
        Public IP probe.
    dns_client : DigitalOceanClient | None, optional
        DigitalOcean DNS client.
    sleep : Callable[[float], None], optional
        Sleep function used between cycles.
    """

    def __init__(
        self,
        env_path: Path = DEFAULT_ENV_PATH,
        probe: PublicIPProbe | None = None,
        dns_client: DigitalOceanClient | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.env_path = env_path
        self.probe = probe or PublicIPProbe()
        self.dns_client = dns_client or DigitalOceanClient()
        self._sleep = sleep

    def run_once(self) -> CycleResult:
        """
        Run one update cycle.

        Returns
        -------
        CycleResult
            The outcome and the delay before the next cycle.
        """
        config = load_config(self.env_path)

        if not config.api_token:
            logger.error(
                'DigitalOcean API token not found in "%s". Please update the file.',
                self.env_path,
            )
            logger.info("Waiting %d seconds before retrying.", TOKEN_RETRY_DELAY)
            return CycleResult(success=False, delay=TOKEN_RETRY_DELAY)

        if not config.has_known_record_type:
            logger.warning(
                'Record type "%s" in "%s" is not one of %s.',
                config.record_type,
                self.env_path,
                ", ".join(RecordType),
            )

        if config.has_placeholder_token:
            logger.warning(
                'The API token in "%s" is still the placeholder value.',
                self.env_path,
            )

        ip = self.probe.current()
        if not ip:
            logger.error(
                "Failed to get current public IP. Will retry in %d seconds.",
                UPDATE_INTERVAL,
            )
            return CycleResult(success=False, delay=UPDATE_INTERVAL)

        logger.info("Current public IP: %s", ip)
        success = self.dns_client.update(
            config.api_token,
            config.domain,
            config.subdomain,
            config.record_type,
            ip,
            config.ttl,
            skip_unchanged=config.skip_unchanged,
        )

        if success:
            logger.info(
                "DNS update successful. Next check in %d seconds.",
                UPDATE_INTERVAL,
            )
        else:
            logger.error(
                "DNS update failed. Will retry in %d seconds.",
                UPDATE_INTERVAL,
            )
        return CycleResult(success=success, delay=UPDATE_INTERVAL, ip=ip)

    def run_forever(self) -> None:
        """Run update cycles until the process is stopped."""
        while True:
            result = self.run_once()
            self._sleep(result.delay)
