"""Polling wait for transaction confirmation."""

import asyncio
import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from utxo_provider.errors import AwaitTxTimeoutError

logger = logging.getLogger(__name__)


class TxStatus(Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"


class ConfirmationWaiter:
    """
    PENDING → CONFIRMED state machine driven by a status probe.

    The probe runs every `check_interval` seconds. With a `timeout` the wait
    raises AwaitTxTimeoutError once the deadline passes; without one it runs
    until confirmation or until the awaiting task is cancelled.
    """

    def __init__(
        self,
        tx_hash: str,
        probe: Callable[[], Awaitable[bool]],
        check_interval: float = 3.0,
        timeout: Optional[float] = None,
    ):
        if check_interval <= 0:
            raise ValueError(f"check_interval must be positive, got {check_interval}")
        self.tx_hash = tx_hash
        self.probe = probe
        self.check_interval = check_interval
        self.timeout = timeout
        self.status = TxStatus.PENDING
        self.checks = 0

    async def wait(self) -> bool:
        loop = asyncio.get_running_loop()
        deadline = loop.time() + self.timeout if self.timeout is not None else None

        while self.status is TxStatus.PENDING:
            self.checks += 1
            if await self.probe():
                self.status = TxStatus.CONFIRMED
                break
            if deadline is not None and loop.time() + self.check_interval > deadline:
                raise AwaitTxTimeoutError(
                    f"Transaction {self.tx_hash} not confirmed within {self.timeout}s ({self.checks} checks)"
                )
            await asyncio.sleep(self.check_interval)

        logger.info(f"Transaction {self.tx_hash} confirmed after {self.checks} checks")
        return True
