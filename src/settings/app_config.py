"""
통합 설정 진입점

.env (프로젝트 루트)를 로드한 뒤 환경변수로 덮어쓸 수 있는 값들을 정의한다.

Usage:
    from src.settings.app_config import WEB_HOST, WEB_PORT
    from src.settings.constants import NOTIFICATION_EXPIRED_PREFIX
    from src.settings.timing import TIMER_JOIN_TIMEOUT
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# ── 프로젝트 경로 ──
PROJECT_ROOT = Path(__file__).parent.parent.parent

load_dotenv(PROJECT_ROOT / ".env")

LOG_DIR = Path(os.getenv("INVENTORY_LOG_DIR") or PROJECT_ROOT / "logs")

# ── 웹 서버 ──
WEB_HOST = os.getenv("INVENTORY_WEB_HOST", "127.0.0.1")
WEB_PORT = int(os.getenv("INVENTORY_WEB_PORT", "5000"))
WEB_THREADS = int(os.getenv("INVENTORY_WEB_THREADS", "4"))

# 미설정 시 create_app()에서 임의 생성
FLASK_SECRET_KEY = os.getenv("FLASK_SECRET_KEY")
