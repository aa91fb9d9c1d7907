"""Configuration management using pydantic-settings."""

from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Server Configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=7788, description="Server port")
    debug: bool = Field(default=False, description="Debug mode")

    # Database Configuration
    database_path: str = Field(default="./data/agent_squad.db", description="DuckDB database file")

    # LLM Provider Configuration
    openai_api_key: Optional[str] = Field(default=None, description="OpenAI API key")
    openai_api_base: str = Field(default="https://api.openai.com/v1", description="OpenAI-compatible API base URL")
    openai_model: str = Field(default="gpt-4o-mini", description="Chat completion model")
    llm_temperature: float = Field(default=0.7, description="Sampling temperature")
    llm_max_tokens: int = Field(default=2000, description="Maximum completion tokens")
    llm_timeout: float = Field(default=60.0, description="LLM call timeout in seconds")

    # Workflow Configuration
    build_turn_delay: float = Field(default=3.0, description="Delay before the background build turn, in seconds")
    title_max_length: int = Field(default=50, description="Characters of the first utterance kept in the title")

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default="./logs/app.log", description="Log file path")

    def masked_api_key(self) -> str:
        """Return the API key with its middle hidden, for startup logs."""
        key = self.openai_api_key
        if not key:
            return "Not set"
        if len(key) > 12:
            return key[:8] + "..." + key[-4:]
        return "***"


# Global settings instance
settings = Settings()
