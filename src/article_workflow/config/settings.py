"""Application settings."""

from functools import lru_cache
import os
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[3]

GATEWAY_URL_TEMPLATE = (
    "https://gateway.ai.cloudflare.com/v1/{account_id}/{gateway}/google-ai-studio/v1beta"
)


class ProviderConfig(BaseModel):
    """Resolved connection details handed to generation providers."""

    model_config = ConfigDict(frozen=True)

    api_key: str
    base_url: str
    headers: dict[str, str] = Field(default_factory=dict)
    timeout_s: float = 120.0
    max_retries: int = 0
    backoff_s: float = 0.0


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables."""

    app_name: str = "article-workflow"
    app_env: str = "dev"
    log_level: str = "INFO"
    database_url: str = ""
    checkpoint_steps: bool = True
    google_api_key: str = ""
    ai_gateway_account_id: str = ""
    ai_gateway_name: str = ""
    ai_gateway_api_key: str = ""
    llm_base_url: str = "https://generativelanguage.googleapis.com/v1beta"
    search_model: str = "gemini-2.0-flash"
    writer_model: str = "gemini-2.0-flash-thinking-exp-01-21"
    llm_timeout_s: float = Field(default=120.0, ge=1.0)
    llm_max_retries: int = Field(default=0, ge=0)
    llm_backoff_s: float = Field(default=0.0, ge=0.0)

    model_config = SettingsConfigDict(
        env_prefix="ARTICLE_WORKFLOW_",
        extra="ignore",
        env_file=(PROJECT_ROOT / ".env", PROJECT_ROOT / ".env.local"),
        env_file_encoding="utf-8",
    )

    def resolved_database_url(self) -> str:
        return self.database_url or os.getenv("DATABASE_URL", "")

    def resolved_google_api_key(self) -> str:
        return self.google_api_key or os.getenv("GOOGLE_API_KEY", "")

    def resolved_base_url(self) -> str:
        if self.ai_gateway_account_id and self.ai_gateway_name:
            return GATEWAY_URL_TEMPLATE.format(
                account_id=self.ai_gateway_account_id,
                gateway=self.ai_gateway_name,
            )
        return self.llm_base_url

    def provider_config(self) -> ProviderConfig:
        headers: dict[str, str] = {}
        # The gateway token only applies when requests are routed through the gateway.
        if self.ai_gateway_account_id and self.ai_gateway_name and self.ai_gateway_api_key:
            headers["cf-aig-authorization"] = f"Bearer {self.ai_gateway_api_key}"
        return ProviderConfig(
            api_key=self.resolved_google_api_key(),
            base_url=self.resolved_base_url(),
            headers=headers,
            timeout_s=self.llm_timeout_s,
            max_retries=self.llm_max_retries,
            backoff_s=self.llm_backoff_s,
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
