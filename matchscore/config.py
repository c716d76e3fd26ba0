# matchscore/config.py
"""
Centralized configuration using pydantic-settings with validation and feature flags.
"""

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ScoringSettings(BaseSettings):
    """Score composition configuration."""
    model_config = SettingsConfigDict(env_prefix="SCORING_")

    steam_strategy: str = Field(
        default="multiplicative",
        description="Steam adjustment used by the composer (multiplicative or additive)",
    )
    debug_perfect_scores: bool = Field(
        default=False,
        description="Log the factor breakdown whenever a final score reaches 100",
    )

    @field_validator('steam_strategy')
    @classmethod
    def validate_steam_strategy(cls, v):
        """Validate steam strategy name."""
        valid = ['multiplicative', 'additive']
        if v.lower() not in valid:
            raise ValueError(f"Must be one of: {valid}")
        return v.lower()


class FeatureFlags(BaseSettings):
    """Feature flags for optional functionality."""
    model_config = SettingsConfigDict(env_prefix="FEATURE_")

    enable_metrics: bool = Field(default=True, description="Enable Prometheus metrics")


class LoggingSettings(BaseSettings):
    """Logging configuration."""
    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(default="json", description="Log format (json or text)")
    include_request_id: bool = Field(default=True, description="Include request IDs in logs")

    @field_validator('level')
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f"Must be one of: {valid_levels}")
        return v.upper()

    @field_validator('format')
    @classmethod
    def validate_log_format(cls, v):
        """Validate log format."""
        if v.lower() not in ('json', 'text'):
            raise ValueError("Must be 'json' or 'text'")
        return v.lower()


class Settings(BaseSettings):
    """Main application settings combining all configuration sections."""
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Sub-configurations
    scoring: ScoringSettings = Field(default_factory=ScoringSettings)
    features: FeatureFlags = Field(default_factory=FeatureFlags)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Application metadata
    app_name: str = Field(default="matchscore", description="Application name")
    app_version: str = Field(default="1.0.0", description="Application version")
    environment: str = Field(default="development", description="Environment")

    @field_validator('environment')
    @classmethod
    def validate_environment(cls, v):
        """Validate environment."""
        valid_envs = ['development', 'staging', 'production']
        if v not in valid_envs:
            raise ValueError(f"Must be one of: {valid_envs}")
        return v

    def validate_critical_config(self) -> None:
        """Validate cross-section configuration and raise helpful errors."""
        errors = []

        # Perfect-score debugging dumps trait vectors; keep it out of production
        if self.environment == 'production' and self.scoring.debug_perfect_scores:
            errors.append("SCORING_DEBUG_PERFECT_SCORES must be disabled in production")

        if errors:
            error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {error}" for error in errors)
            raise ValueError(error_msg)


# Global settings instance
settings = Settings()

# Validate critical configuration on import
settings.validate_critical_config()
