"""
Point-of-Sale Sales Analytics
Centralized Configuration Management

This module provides configuration management using Pydantic settings with
environment variable support, validation, and type safety.
"""

from functools import lru_cache
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ReportingSettings(BaseSettings):
    """Sales Reporting Configuration"""
    
    model_config = SettingsConfigDict(env_prefix="REPORT_")
    
    tax_rate: float = Field(default=0.10, description="Sales tax rate applied to order subtotals")
    tax_tolerance: float = Field(default=0.01, description="Absolute tolerance when checking order tax")
    default_period: str = Field(default="week", description="Period used when none is requested")
    custom_fallback_days: int = Field(default=30, description="Days covered by a custom period without a range")
    top_products: int = Field(default=10, description="Number of products in a report's top list")
    low_stock_threshold: int = Field(default=20, description="Products with stock below this are reported as low")
    
    @field_validator("tax_rate")
    @classmethod
    def validate_tax_rate(cls, v: float) -> float:
        """Validate tax rate is a fraction"""
        if not 0 <= v < 1:
            raise ValueError("Tax rate must be in [0, 1)")
        return v


class CurrencySettings(BaseSettings):
    """Currency Display Configuration"""
    
    model_config = SettingsConfigDict(env_prefix="CURRENCY_")
    
    code: str = Field(default="IDR", description="ISO currency code")
    symbol: str = Field(default="Rp", description="Display symbol")
    decimals: int = Field(default=0, description="Fraction digits shown")
    thousands_separator: str = Field(default=".", description="Digit group separator")
    decimal_separator: str = Field(default=",", description="Fraction separator")


class MonitoringSettings(BaseSettings):
    """Logging Configuration"""
    
    model_config = SettingsConfigDict(env_prefix="")
    
    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or text")


class Settings(BaseSettings):
    """
    Main Application Settings
    
    Aggregates all configuration sections and provides a single entry point
    for accessing application configuration.
    """
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        populate_by_name=True,
    )
    
    # Application
    app_name: str = Field(default="pos-analytics", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    
    # Version
    version: str = Field(default="1.0.0", description="Application version")
    
    # Subsystem configurations
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
    currency: CurrencySettings = Field(default_factory=CurrencySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)
    
    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.
    
    Uses LRU cache to ensure settings are only loaded once.
    
    Returns:
        Settings: Application settings instance
    """
    return Settings()
