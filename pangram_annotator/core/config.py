from pathlib import Path

from pydantic import SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent.parent
ENV_FILE = BASE_DIR / '.env'

DEFAULT_API_URL = "https://text.api.pangram.com/v3"


class ApiConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix='PANGRAM_',
        env_file=ENV_FILE,
        extra='ignore',  # Ignore extra environment variables
    )
    url: str = DEFAULT_API_URL
    api_key: SecretStr | None = None
    api_key_header: str = 'x-api-key'
    timeout_s: float = 60.0

    @computed_field
    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None and bool(self.api_key.get_secret_value().strip())


class Config(BaseSettings):
    app_name: str = "pangram-annotator"
    debug: bool = False

    # Marker placed on every annotation this tool creates
    owner_tag: str = "pangram"

    # Nested configs
    api: ApiConfig = ApiConfig()

    model_config = SettingsConfigDict(
        env_file=ENV_FILE,
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore',
    )

config = Config()
