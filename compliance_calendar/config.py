"""
Application settings.

Values come from environment variables prefixed ``COMPLIANCE_`` or from a
local ``.env`` file:

    COMPLIANCE_CATALOG_PATH=/etc/compliance/rules.json
    COMPLIANCE_LOG_LEVEL=INFO
"""

from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="COMPLIANCE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Override for the packaged compliance_rules.json
    catalog_path: Optional[str] = None

    calendar_months: int = 12
    log_level: str = "WARNING"
    output_dir: str = "reports"


settings = Settings()
