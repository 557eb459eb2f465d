"""Centralized configuration for the weather MCP server.

Uses pydantic-settings for environment variable loading and validation.
All settings can be overridden via environment variables with the
``WEATHER_MCP_`` prefix (or a ``.env`` file).
"""

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServerSettings(BaseSettings):
    """Settings shared by the stdio, HTTP and SSE bindings.

    Environment variables:
        WEATHER_MCP_HOST: Interface the HTTP/SSE bindings listen on
        WEATHER_MCP_PORT / PORT: Listening port for the HTTP/SSE bindings
        WEATHER_MCP_SERVER_NAME: Server name reported on initialize
        WEATHER_MCP_SERVER_VERSION: Server version reported on initialize
        WEATHER_MCP_PROTOCOL_VERSION: Protocol version tag
        WEATHER_MCP_CORS_ALLOW_ORIGINS: Comma-separated CORS origins
        WEATHER_MCP_LOG_LEVEL: Logging level
        WEATHER_MCP_LOG_JSON: Enable JSON log format
        WEATHER_MCP_LOG_FILE: Optional log file path
        WEATHER_MCP_OTEL_ENABLED: Enable OpenTelemetry
        WEATHER_MCP_OTEL_ENDPOINT: OTLP collector endpoint
        WEATHER_MCP_OTEL_PROTOCOL: OTLP protocol (grpc/http)
        WEATHER_MCP_OTEL_SERVICE_NAME: Service name for traces
    """

    model_config = SettingsConfigDict(
        env_prefix="WEATHER_MCP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Network settings
    host: str = Field(
        default="0.0.0.0",
        description="Interface the HTTP/SSE bindings listen on",
    )
    port: int = Field(
        default=8080,
        validation_alias=AliasChoices("WEATHER_MCP_PORT", "PORT"),
        description="Listening port for the HTTP/SSE bindings",
    )
    cors_allow_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins",
    )

    # Protocol settings
    server_name: str = Field(
        default="weather-mcp",
        description="Server name reported in serverInfo",
    )
    server_version: str = Field(
        default="1.0.0",
        description="Server version reported in serverInfo",
    )
    protocol_version: str = Field(
        default="2025-03-26",
        description="Protocol version tag returned on initialize",
    )

    # Observability settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_json: bool = Field(
        default=False,
        description="Enable JSON log format",
    )
    log_file: str | None = Field(
        default=None,
        description="Optional path of a JSON log file",
    )
    otel_enabled: bool = Field(
        default=False,
        description="Enable OpenTelemetry tracing",
    )
    otel_endpoint: str | None = Field(
        default=None,
        description="OTLP collector endpoint (console exporter when unset)",
    )
    otel_protocol: str = Field(
        default="grpc",
        description="OTLP protocol (grpc/http)",
    )
    otel_service_name: str = Field(
        default="weather-mcp",
        description="Service name for traces",
    )

    def get_cors_origins(self) -> list[str]:
        """Get allowed CORS origins as a list.

        Returns:
            List of origins, ``["*"]`` by default.
        """
        return [o.strip() for o in self.cors_allow_origins.split(",") if o.strip()]


# Global settings instance - import this directly
settings = ServerSettings()
