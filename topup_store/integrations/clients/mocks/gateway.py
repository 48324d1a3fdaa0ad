"""
Mock payment gateway: MOCK client.

Behavior is driven entirely by the phone number prefix so QA suites can
assert exact outcomes per fixture number:
- error prefix (099) -> immediate GatewayError, nothing is charged
- slow prefix (088)  -> success after the slow delay (5s)
- anything else      -> success after the default delay (1.5s)
"""

import asyncio
import logging
from typing import Awaitable, Callable, Optional

from topup_store.error_handler import GatewayError, GatewayTimeoutError
from topup_store.integrations.contracts.gateway import (
    GatewayOutcome,
    GatewayResult,
    resolve_policy,
)
from topup_store.utils.config_loader import GatewayConfig

logger = logging.getLogger(__name__)


class MockGatewayClient:
    """
    Deterministic mock gateway.

    Parameters
    ----------
    config : GatewayConfig
        Prefixes and delays. Zero delays make the client return immediately.
    sleep : callable
        Awaitable used for the simulated processing delay. Defaults to
        asyncio.sleep; tests may pass a recorder.
    """

    def __init__(
        self,
        config: Optional[GatewayConfig] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.config = config or GatewayConfig()
        self._sleep = sleep

    async def authorize(self, phone: str, timeout: Optional[float] = None) -> GatewayResult:
        """Simulate a charge against ``phone``.

        Raises GatewayError for the error prefix. With ``timeout`` (seconds),
        raises GatewayTimeoutError if the simulated delay does not finish in
        time.
        """
        policy = resolve_policy(phone, self.config)
        logger.info("[GATEWAY MOCK] phone=%s outcome=%s delay_ms=%d", phone, policy.outcome.value, policy.delay_ms)

        if policy.outcome is GatewayOutcome.FAIL:
            raise GatewayError()

        if policy.delay_ms:
            try:
                if timeout is None:
                    await self._sleep(policy.delay_seconds)
                else:
                    await asyncio.wait_for(self._sleep(policy.delay_seconds), timeout)
            except asyncio.TimeoutError as e:
                logger.warning("[GATEWAY MOCK] phone=%s exceeded timeout %.3fs", phone, timeout)
                raise GatewayTimeoutError() from e

        return GatewayResult(phone=phone, outcome=policy.outcome, delay_ms=policy.delay_ms)
