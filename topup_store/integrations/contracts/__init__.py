"""
Contracts (data models).

Request/response shapes for the payment gateway, shared by mock and any
future real client.
"""
