"""
Mock integration clients.

These clients return deterministic responses without calling any external API.
Mock clients must follow the SAME interface as a real gateway client would.
"""

from .gateway import MockGatewayClient

__all__ = ["MockGatewayClient"]
