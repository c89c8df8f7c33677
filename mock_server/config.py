from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    bot_token: str = "1234567890:TEST_TOKEN_FOR_MOCK_SERVER"
    bot_first_name: str = "TestBot"
    bot_username: str = "test_bot"

    # Standalone server (python -m mock_server)
    host: str = "127.0.0.1"
    port: int = 8081
    log_level: str = "INFO"
    echo_requests: bool = False

    # Forward origin name for private senders without a username
    hidden_user_name: str = "no_username"

    file_path_prefix: str = "files"

    model_config = SettingsConfigDict(
        env_prefix="MOCK_SERVER_",
        env_file=BASE_DIR / ".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def bot_id(self) -> int:
        return int(self.bot_token.split(":", 1)[0])


@lru_cache
def get_settings() -> Settings:
    return Settings()
