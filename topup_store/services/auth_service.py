"""Registration, login and mocked OTP / password reset.

Passwords are stored and compared in plaintext, the login token is a fixed
placeholder and the OTP is a fixed code. These are sandbox fixtures for QA
suites, not security mechanisms.
"""

import logging
from typing import Any, Dict, Optional

from topup_store.database.base import TopUpStore
from topup_store.error_handler import AuthError, ConflictError, NotFoundError
from topup_store.services.validation import raise_if_errors, require_email, require_str
from topup_store.utils.config_loader import AuthConfig

logger = logging.getLogger(__name__)


class AuthService:

    def __init__(self, store: TopUpStore, config: Optional[AuthConfig] = None):
        self.store = store
        self.config = config or AuthConfig()

    def register(self, email: Any, password: Any) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        email = require_email(email, "email", errors)
        password = require_str(password, "password", errors)
        raise_if_errors(errors)

        try:
            self.store.create_user(email, password)
        except ConflictError as e:
            raise ConflictError(status_code=self.config.conflict_status_code) from e
        logger.info("Registered user %s", email)
        return {"status": "success", "message": "Created"}

    def login(self, email: Any, password: Any) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        email = require_email(email, "email", errors)
        password = require_str(password, "password", errors)
        raise_if_errors(errors)

        user = self.store.get_user(email)
        if not user or user.password != password:
            raise AuthError("Invalid credentials")
        return {"token": self.config.static_token}

    def request_otp(self, email: Any) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        email = require_email(email, "email", errors)
        raise_if_errors(errors)
        # Nothing is sent; the code is always the configured constant.
        logger.info("OTP requested for %s", email)
        return {"status": "success", "message": "OTP sent"}

    def verify_otp(self, email: Any, otp: Any) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        require_email(email, "email", errors)
        otp = require_str(otp, "otp", errors)
        raise_if_errors(errors)

        if otp != self.config.otp_code:
            raise AuthError("Invalid OTP")
        return {"status": "success", "message": "OTP verified"}

    def reset_password(self, email: Any, new_password: Any) -> Dict[str, str]:
        errors: Dict[str, str] = {}
        email = require_email(email, "email", errors)
        new_password = require_str(new_password, "newPassword", errors)
        raise_if_errors(errors)

        if not self.store.update_user_password(email, new_password):
            raise NotFoundError("User not found")
        logger.info("Password reset for %s", email)
        return {"status": "success", "message": "Password updated"}
