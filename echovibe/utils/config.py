"""Configuration management using Pydantic Settings."""

import os
from pydantic_settings import BaseSettings
from typing import List, Optional


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # LLM providers
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-3-flash-preview"
    openai_api_key: Optional[str] = None
    openai_model: str = "gpt-4o-mini"
    llm_provider: str = "gemini"  # gemini | openai | bedrock
    llm_temperature: float = 0.7

    # AWS Bedrock (optional)
    aws_profile: Optional[str] = None
    aws_region: str = "us-east-1"
    bedrock_model_id: Optional[str] = None

    # SMTP transport for quote emails
    smtp_host: Optional[str] = None
    smtp_port: int = 587
    smtp_user: Optional[str] = None
    smtp_pass: Optional[str] = None
    smtp_from: str = '"EchoVibe Studio" <noreply@echovibe.studio>'
    smtp_max_attempts: int = 2

    # Itinerary defaults
    default_budget: str = "500 - 1500€"

    # App Configuration
    environment: str = "development"
    log_level: str = "INFO"
    request_timeout: int = 30
    host: str = "0.0.0.0"
    port: int = 3000
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    class Config:
        """Pydantic configuration."""
        env_file = os.path.join(os.path.dirname(__file__), "..", "..", ".env")
        case_sensitive = False
        extra = "ignore"


# Global settings instance
settings = Settings()
