"""
Classicmodels BI Dashboard
Centralized Configuration Management

Pydantic settings with environment variable support for the reporting API:
database pool, per-route reporting limits, CORS and logging.
"""

from functools import lru_cache
from typing import Optional, List
from pydantic import Field, field_validator, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

# Sections are built by default_factory, so each reads the .env file itself
_ENV_FILE = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


class DatabaseSettings(BaseSettings):
    """Relational store (classicmodels) configuration"""

    model_config = SettingsConfigDict(env_prefix="DB_", **_ENV_FILE)

    url: Optional[str] = Field(default=None, description="Full SQLAlchemy URL (overrides the parts below)")
    driver: str = Field(default="mysql+aiomysql", description="SQLAlchemy async driver")
    host: str = Field(default="localhost", description="Database host")
    port: int = Field(default=3306, description="Database port")
    name: str = Field(default="classicmodels", description="Database name")
    user: str = Field(default="root", description="Database user")
    password: SecretStr = Field(default="", description="Database password")
    pool_size: int = Field(default=10, description="Connection pool size")
    max_overflow: int = Field(default=0, description="Connections allowed beyond pool_size")
    pool_timeout: int = Field(default=30, description="Seconds to wait for a pooled connection")
    echo: bool = Field(default=False, description="Echo SQL queries")

    @property
    def async_url(self) -> str:
        """Async database URL - uses DB_URL if set, otherwise builds from parts"""
        if self.url:
            return self.url
        return URL.create(
            drivername=self.driver,
            username=self.user,
            password=self.password.get_secret_value() or None,
            host=self.host,
            port=self.port,
            database=self.name,
        ).render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        """True when the configured store is SQLite (tests, local demos)"""
        return self.async_url.startswith("sqlite")


class ReportingSettings(BaseSettings):
    """Per-route scope defaults and fixed caps"""

    model_config = SettingsConfigDict(env_prefix="REPORT_", **_ENV_FILE)

    recent_orders_limit: int = Field(default=10, description="Default rows for /orders/recent")
    order_analytics_limit: int = Field(default=10000, description="Default order scope for /orders/analytics")
    products_limit: int = Field(default=10000, description="Default cutoff depth for /products")
    products_page_size: int = Field(default=20, description="Fixed cap on /products rows")
    customers_page_size: int = Field(default=20, description="Fixed cap on /customers rows")
    top_customers: int = Field(default=10, description="Rows in /customers/top")
    daily_revenue_limit: int = Field(default=365, description="Default days for /revenue/daily")
    monthly_revenue_limit: int = Field(default=12, description="Months in /revenue/monthly")
    top_offices: int = Field(default=5, description="Offices in the overview")
    top_products: int = Field(default=10, description="Products in the overview")
    top_employees: int = Field(default=10, description="Employees in the overview")


class SecuritySettings(BaseSettings):
    """CORS configuration"""

    model_config = SettingsConfigDict(env_prefix="", **_ENV_FILE)

    cors_origins: List[str] = Field(
        default=["*"],
        alias="CORS_ORIGINS",
        description="Allowed CORS origins"
    )


class MonitoringSettings(BaseSettings):
    """Logging configuration"""

    model_config = SettingsConfigDict(env_prefix="", **_ENV_FILE)

    log_level: str = Field(default="INFO", alias="LOG_LEVEL", description="Logging level")
    log_format: str = Field(default="json", alias="LOG_FORMAT", description="Log format: json or text")

    @field_validator("log_format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        """Validate log format value"""
        if v.lower() not in ("json", "text"):
            raise ValueError("Log format must be 'json' or 'text'")
        return v.lower()


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
    )

    # Application
    app_name: str = Field(default="classicmodels-dashboard", alias="APP_NAME", description="Application name")
    app_env: str = Field(default="development", alias="APP_ENV", description="Environment")
    debug: bool = Field(default=False, alias="DEBUG", description="Debug mode")

    # API Server
    api_host: str = Field(default="0.0.0.0", alias="API_HOST", description="API host")
    api_port: int = Field(default=5000, alias="PORT", description="API port")
    api_workers: int = Field(default=4, alias="WORKERS", description="API workers")

    # Version
    version: str = Field(default="1.0.0", description="Application version")

    # Subsystem configurations
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    reporting: ReportingSettings = Field(default_factory=ReportingSettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    monitoring: MonitoringSettings = Field(default_factory=MonitoringSettings)

    @field_validator("app_env")
    @classmethod
    def validate_env(cls, v: str) -> str:
        """Validate environment value"""
        allowed = ["development", "staging", "production", "testing"]
        if v.lower() not in allowed:
            raise ValueError(f"Environment must be one of: {allowed}")
        return v.lower()

    @property
    def is_production(self) -> bool:
        """Check if running in production"""
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        """Check if running in development"""
        return self.app_env == "development"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached application settings.

    Uses LRU cache to ensure settings are only loaded once.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
