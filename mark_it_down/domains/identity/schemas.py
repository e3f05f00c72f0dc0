from pydantic import BaseModel
from typing import Optional
from datetime import datetime
import uuid

from mark_it_down.core.schemas import CamelModel


class RegisterRequest(CamelModel):
    """Схема для регистрации по email и паролю"""
    email: Optional[str] = None
    password: Optional[str] = None
    name: Optional[str] = None


class RegisterResponse(CamelModel):
    message: str
    user_id: uuid.UUID


class LoginBody(CamelModel):
    """Схема для входа пользователя"""
    email: Optional[str] = None
    password: Optional[str] = None


class UserResponse(CamelModel):
    """Схема для ответа с данными пользователя"""
    id: uuid.UUID
    email: str
    name: str
    github_username: Optional[str] = None
    github_connected: bool
    created_at: datetime
    updated_at: datetime


class Token(BaseModel):
    """Схема для JWT токена"""
    access_token: str
    token_type: str = "bearer"
