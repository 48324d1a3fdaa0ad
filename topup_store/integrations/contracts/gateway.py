"""
Payment gateway contract.

Defines the outcome of a gateway authorization and the pure policy that maps
a phone number to that outcome. The mock client in
clients/mocks/gateway.py applies the policy; any future real client must
return the same GatewayResult shape.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from topup_store.utils.config_loader import GatewayConfig


class GatewayOutcome(str, Enum):
    FAIL = "FAIL"
    SLOW_SUCCESS = "SLOW_SUCCESS"
    SUCCESS = "SUCCESS"


@dataclass(frozen=True)
class GatewayPolicy:
    outcome: GatewayOutcome
    delay_ms: int

    @property
    def delay_seconds(self) -> float:
        return self.delay_ms / 1000.0


@dataclass(frozen=True)
class GatewayResult:
    phone: str
    outcome: GatewayOutcome
    delay_ms: int


def resolve_policy(phone: str, config: GatewayConfig) -> GatewayPolicy:
    """Map a phone number to its gateway behavior. Deterministic, no state."""
    phone = (phone or "").strip()
    if phone.startswith(config.error_prefix):
        return GatewayPolicy(GatewayOutcome.FAIL, 0)
    if phone.startswith(config.slow_prefix):
        return GatewayPolicy(GatewayOutcome.SLOW_SUCCESS, config.slow_delay_ms)
    return GatewayPolicy(GatewayOutcome.SUCCESS, config.default_delay_ms)
