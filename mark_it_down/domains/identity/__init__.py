from mark_it_down.domains.identity.entities import User, CredentialLogin, OAuthLogin, LoginRequest
from mark_it_down.domains.identity.schemas import (
    RegisterRequest, RegisterResponse, LoginBody, UserResponse, Token
)

__all__ = [
    "User", "CredentialLogin", "OAuthLogin", "LoginRequest",
    "RegisterRequest", "RegisterResponse", "LoginBody", "UserResponse", "Token"
]
