import hashlib
from datetime import datetime, timedelta
from typing import Optional, Dict, Any
from jose import JWTError, jwe, jwt
from jose.constants import ALGORITHMS
from jose.exceptions import JWEError
from passlib.context import CryptContext

from mark_it_down.core.config import settings

# Контекст для хеширования паролей
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Имя claim с зашифрованным токеном GitHub
GITHUB_TOKEN_CLAIM = "github_token"


def _bcrypt_secret(password: str) -> bytes:
    # bcrypt учитывает только первые 72 байта
    return password.encode("utf-8")[:72]


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Проверка пароля"""
    # у OAuth-аккаунтов хеша нет
    if not hashed_password:
        return False
    return pwd_context.verify(_bcrypt_secret(plain_password), hashed_password)


def get_password_hash(password: str) -> str:
    """Хеширование пароля"""
    return pwd_context.hash(_bcrypt_secret(password))


def _sealing_key() -> bytes:
    return hashlib.sha256(settings.jwt_secret.encode("utf-8")).digest()


def seal_secret(value: str) -> str:
    """Шифрование значения в компактный JWE (dir + A256GCM)"""
    sealed = jwe.encrypt(
        value.encode("utf-8"),
        _sealing_key(),
        algorithm=ALGORITHMS.DIR,
        encryption=ALGORITHMS.A256GCM
    )
    return sealed.decode("utf-8")


def unseal_secret(sealed: str) -> Optional[str]:
    """Расшифровка JWE; None, если значение повреждено или ключ другой"""
    try:
        return jwe.decrypt(sealed, _sealing_key()).decode("utf-8")
    except JWEError:
        return None


def create_access_token(data: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """Создание JWT токена сессии"""
    to_encode = data.copy()

    if expires_delta:
        expire = datetime.utcnow() + expires_delta
    else:
        expire = datetime.utcnow() + timedelta(minutes=settings.session_expire_minutes)

    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    return encoded_jwt


def create_session_token(user_id: str, github_access_token: Optional[str] = None) -> str:
    """Токен сессии: id пользователя и, если есть, зашифрованный токен GitHub"""
    data = {"sub": user_id}
    if github_access_token:
        data[GITHUB_TOKEN_CLAIM] = seal_secret(github_access_token)
    return create_access_token(data)


def verify_token(token: str) -> Optional[Dict[str, Any]]:
    """Проверка JWT токена и извлечение данных"""
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
        return payload
    except JWTError:
        return None


def create_oauth_state() -> str:
    """Подписанный state для OAuth-редиректа"""
    return create_access_token(
        {"type": "oauth_state"},
        expires_delta=timedelta(minutes=settings.oauth_state_expire_minutes)
    )


def verify_oauth_state(state: str) -> bool:
    """Проверка state, вернувшегося от провайдера"""
    payload = verify_token(state)
    return payload is not None and payload.get("type") == "oauth_state"
