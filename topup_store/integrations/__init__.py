"""
Integrations layer.

Everything that talks to a payment backend lives here. Services call
integration clients (under topup_store/integrations/clients) and never
simulate gateway behavior themselves.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (topup_store/api/main.py).
"""

from .contracts.gateway import GatewayOutcome, GatewayPolicy, GatewayResult, resolve_policy

__all__ = ["GatewayOutcome", "GatewayPolicy", "GatewayResult", "resolve_policy"]
