from typing import List

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    database_url: str
    jwt_secret: str
    jwt_algorithm: str = "HS256"
    session_expire_minutes: int = 60 * 24 * 30
    oauth_state_expire_minutes: int = 10
    sql_echo: bool = False
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:3000"]

    # GitHub OAuth app + REST API
    github_client_id: str = ""
    github_client_secret: str = ""
    github_api_url: str = "https://api.github.com"
    github_oauth_url: str = "https://github.com/login/oauth"
    github_oauth_scope: str = "read:user user:email repo"
    github_timeout: float = 30.0

    model_config = {"env_file": ".env", "extra": "ignore"}

settings = Settings()
