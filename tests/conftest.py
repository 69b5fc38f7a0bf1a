"""
Pytest configuration for the Lessons API.

Provides fixtures for:
- Settings override pointing uploads at a temporary directory
- Fresh item repository and notification service per test
- A TestClient with dependency overrides installed
"""

import os
import tempfile
from typing import Dict, Generator

import pytest

# Must be set before lessons_api.main reads settings at import time.
os.environ.setdefault("LESSONS_API_UPLOAD_DIR", tempfile.mkdtemp(prefix="lessons-uploads-"))
os.environ.setdefault("LESSONS_API_NOTIFICATION_DELAY_SECONDS", "0")
os.environ.setdefault("LESSONS_API_LOG_LEVEL", "WARNING")

from fastapi.testclient import TestClient  # noqa: E402

from lessons_api.config import Settings  # noqa: E402
from lessons_api.dependencies import (  # noqa: E402
    get_item_repository,
    get_notification_service,
    get_settings_dependency,
)
from lessons_api.main import app  # noqa: E402
from lessons_api.repositories.item_repo import ItemRepository  # noqa: E402
from lessons_api.services.notification_service import NotificationService  # noqa: E402


TEST_TOKEN = "test-token-1234"


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings with a per-test upload directory and a known token."""
    return Settings(
        api_token=TEST_TOKEN,
        upload_dir=str(tmp_path / "uploads"),
        notification_delay_seconds=0,
        log_level="DEBUG",
    )


@pytest.fixture
def item_repo() -> ItemRepository:
    """Empty item repository."""
    return ItemRepository()


@pytest.fixture
def notification_service() -> NotificationService:
    """Notification service that delivers without delay."""
    return NotificationService(delay_seconds=0)


@pytest.fixture
def client(
    test_settings: Settings,
    item_repo: ItemRepository,
    notification_service: NotificationService,
) -> Generator[TestClient, None, None]:
    """TestClient with settings, storage and notifications overridden."""
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
    app.dependency_overrides[get_item_repository] = lambda: item_repo
    app.dependency_overrides[get_notification_service] = lambda: notification_service

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> Dict[str, str]:
    """Authorization header carrying the test token."""
    return {"Authorization": f"Bearer {TEST_TOKEN}"}


@pytest.fixture
def sample_item() -> Dict:
    """Valid item payload."""
    return {
        "name": "Mechanical keyboard",
        "description": "Tenkeyless, brown switches",
        "price": 89.9,
        "quantity": 5,
        "category": "electronics",
    }
