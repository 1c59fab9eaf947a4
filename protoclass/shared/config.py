"""Centralized configuration for the inheritance scanner."""

from typing import Literal, Optional

import dotenv
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from protoclass.domain.models.inheritance import ConflictPolicy, ScanMode

dotenv.load_dotenv()


class Settings(BaseSettings):
    """Application settings loaded from ``PROTOCLASS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="PROTOCLASS_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    scan_mode: ScanMode = Field(
        default=ScanMode.SINGLE_PASS,
        description="Traversal strategy for constructor restoration correlation",
    )
    conflict_policy: ConflictPolicy = Field(
        default=ConflictPolicy.OVERWRITE,
        description="Behaviour when a class is assigned a different superclass",
    )
    output_format: Literal["text", "json", "mermaid"] = Field(
        default="text", description="Default CLI report format"
    )
    source_encoding: str = Field(
        default="utf-8", description="Encoding used to read JavaScript files"
    )
    grammar_path: Optional[str] = Field(
        default=None, description="Lark grammar file overriding the bundled JavaScript grammar"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )


settings = Settings()
