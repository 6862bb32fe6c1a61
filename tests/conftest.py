"""
공유 테스트 픽스처

- fake_clock / fake_timer: 실제 시간 없이 만료 스케줄러 검증 (tests/fakes.py)
- inventory: 가짜 타이머 기반 InventoryService
- live_inventory: 실제 스레드 타이머 기반 InventoryService
- flask_app / client: 테스트용 Flask 앱
"""

import sys
from pathlib import Path

import pytest

# 프로젝트 루트를 sys.path에 추가
PROJECT_ROOT = Path(__file__).parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from src.application.services.inventory_service import InventoryService  # noqa: E402
from tests.fakes import FakeClock, FakeWakeupTimer  # noqa: E402


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_timer():
    return FakeWakeupTimer()


@pytest.fixture
def inventory(fake_clock, fake_timer):
    """가짜 시계/타이머 기반 InventoryService"""
    service = InventoryService(timer=fake_timer, clock=fake_clock)
    yield service
    service.close()


@pytest.fixture
def live_inventory():
    """실제 스레드 타이머 기반 InventoryService"""
    service = InventoryService()
    yield service
    service.close()


@pytest.fixture
def flask_app(inventory):
    """Flask 테스트 앱 (가짜 타이머 인벤토리 주입)"""
    from src.web.app import create_app

    app = create_app(inventory=inventory)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(flask_app):
    return flask_app.test_client()
