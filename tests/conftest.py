"""Shared pytest fixtures for the test suite.

Provides a deterministic weather service (seeded random source, frozen
clock), a router over it, and app fixtures for the HTTP bindings.
"""

import random
import sys
from datetime import UTC, datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from weather_mcp.config import ServerSettings
from weather_mcp.data import WeatherService
from weather_mcp.tools import ToolRouter
from weather_mcp.transports import PushChannelRegistry, create_http_app, create_sse_app

FROZEN_NOW = datetime(2025, 3, 26, 9, 30, 0, tzinfo=UTC)


@pytest.fixture
def frozen_now() -> datetime:
    """Fixed 'current time' used by the weather service."""
    return FROZEN_NOW


@pytest.fixture
def seeded_rng() -> random.Random:
    """Deterministic random source for the synthetic data path."""
    return random.Random(20250326)


@pytest.fixture
def weather_service(seeded_rng: random.Random, frozen_now: datetime) -> WeatherService:
    """WeatherService with deterministic randomness and time."""
    return WeatherService(rng=seeded_rng, clock=lambda: frozen_now)


@pytest.fixture
def router(weather_service: WeatherService) -> ToolRouter:
    """ToolRouter over the deterministic weather service."""
    return ToolRouter(weather_service)


@pytest.fixture
def test_settings() -> ServerSettings:
    """Settings isolated from the developer's .env file."""
    return ServerSettings(_env_file=None, port=8080, cors_allow_origins="*")


@pytest.fixture
def http_client(router: ToolRouter, test_settings: ServerSettings) -> TestClient:
    """TestClient for the request/response binding."""
    return TestClient(create_http_app(router, test_settings))


@pytest.fixture
def channel_registry() -> PushChannelRegistry:
    """Fresh push channel slot."""
    return PushChannelRegistry()


@pytest.fixture
def sse_app(router: ToolRouter, test_settings: ServerSettings, channel_registry: PushChannelRegistry):
    """Server-push binding app sharing ``channel_registry``."""
    return create_sse_app(router, test_settings, channel_registry)


@pytest.fixture
def project_root() -> Path:
    """Get the project root directory."""
    return Path(__file__).parent.parent
