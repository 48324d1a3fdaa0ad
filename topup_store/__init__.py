"""
Mobile TopUp Store: a QA sandbox storefront API.

Registration/login, mocked OTP verification, and a deterministic mock payment
gateway whose behavior depends on the phone number prefix.
"""

__version__ = "3.1.0"
