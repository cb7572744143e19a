"""Application configuration via environment variables."""

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from blog_api.validation import DEFAULT_SPAM_PHRASES


class Settings(BaseSettings):
    """Service configuration loaded from environment variables."""

    model_config = {"env_prefix": ""}

    # Server
    host: str = Field(default="0.0.0.0", description="Server bind host")
    port: int = Field(default=8080, description="Server bind port")
    log_level: str = Field(default="info", description="Log level")

    # Tokens
    jwt_secret: str = Field(description="HMAC key used to sign bearer tokens")
    jwt_algorithm: str = Field(default="HS256", description="JWT signing algorithm")
    jwt_expire_minutes: int = Field(default=30, description="Token lifetime in minutes")

    # Authors and content
    admin_password: str = Field(default="admin", description="Password of the admin identity")
    seed_file: str = Field(
        default="resources/blog_data.json",
        description="JSON file of posts loaded at startup; empty disables seeding",
    )
    spam_phrases: str = Field(
        default=",".join(DEFAULT_SPAM_PHRASES),
        description="Comma-separated phrases that mark a title as spam",
    )

    @property
    def spam_phrase_list(self) -> tuple[str, ...]:
        return tuple(p.strip().lower() for p in self.spam_phrases.split(",") if p.strip())

    @model_validator(mode="after")
    def _check_tokens(self) -> "Settings":
        if not self.jwt_secret.strip():
            raise ValueError("JWT_SECRET must not be empty")
        if self.jwt_expire_minutes <= 0:
            raise ValueError("JWT_EXPIRE_MINUTES must be positive")
        return self
