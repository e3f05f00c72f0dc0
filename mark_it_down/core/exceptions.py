from typing import Any, Optional

from fastapi import status


class AppError(Exception):
    """Базовая ошибка приложения, отдаётся клиенту как JSON"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        return {"error": self.message}


class Unauthorized(AppError):
    """Нет сессии, сессия недействительна или нет токена GitHub"""

    status_code = status.HTTP_401_UNAUTHORIZED


class NotFound(AppError):
    """Запись отсутствует или принадлежит другому пользователю"""

    status_code = status.HTTP_404_NOT_FOUND


class InvalidInput(AppError):
    """Не передано обязательное поле"""

    status_code = status.HTTP_400_BAD_REQUEST


class UpstreamFailure(AppError):
    """GitHub вернул неуспешный ответ; статус и тело пробрасываются клиенту"""

    def __init__(self, message: str, status_code: int = status.HTTP_502_BAD_GATEWAY, details: Optional[Any] = None):
        super().__init__(message)
        self.status_code = status_code
        self.details = details

    def to_dict(self) -> dict:
        payload = super().to_dict()
        if self.details is not None:
            payload["details"] = self.details
        return payload
