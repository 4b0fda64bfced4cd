from typing import Optional

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Client-side settings, read from ``ESTATEHUB_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ESTATEHUB_",
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    API_URL: str = "http://localhost:5000/api"
    # No default: admin mode stays locked until a passphrase is provided.
    ADMIN_PASSPHRASE: Optional[SecretStr] = None
    STORAGE_PATH: str = "~/.estatehub/storage.json"
    RECENTLY_VIEWED_LIMIT: int = 10
