from typing import Any

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from topup_store.api.dependencies import get_auth_service
from topup_store.services.auth_service import AuthService

api = APIRouter()
auth_api = api


# Fields are typed Any: values are coerced and trimmed by the service, the
# way the storefront frontend has always sent them.
class RegisterRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])
    password: Any = Field(default=None, examples=["pass1234"])


class LoginRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])
    password: Any = Field(default=None, examples=["pass1234"])


class OtpRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])


class OtpVerifyRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])
    otp: Any = Field(default=None, examples=["1234"])


class ResetPasswordRequest(BaseModel):
    email: Any = Field(default=None, examples=["qa@example.com"])
    newPassword: Any = Field(default=None, examples=["newPass123"])


@api.post("/register", status_code=201, tags=["Auth"])
async def register(request: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Register a new user."""
    return service.register(request.email, request.password)


@api.post("/login", tags=["Auth"])
async def login(request: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Login with email and password. Returns the sandbox token."""
    return service.login(request.email, request.password)


@api.post("/auth/otp/request", tags=["Auth"])
async def request_otp(request: OtpRequest, service: AuthService = Depends(get_auth_service)):
    return service.request_otp(request.email)


@api.post("/auth/otp/verify", tags=["Auth"])
async def verify_otp(request: OtpVerifyRequest, service: AuthService = Depends(get_auth_service)):
    """Verify a password reset OTP. The sandbox code is always 1234."""
    return service.verify_otp(request.email, request.otp)


@api.post("/auth/reset-password", tags=["Auth"])
async def reset_password(request: ResetPasswordRequest, service: AuthService = Depends(get_auth_service)):
    return service.reset_password(request.email, request.newPassword)
