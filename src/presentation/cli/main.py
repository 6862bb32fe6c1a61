"""
CLI 진입점

Usage:
    python -m src.presentation.cli.main demo
    python -m src.presentation.cli.main serve --host 0.0.0.0 --port 8080
"""

import argparse
import sys
import time
from datetime import datetime, timedelta
from typing import List, Optional

from src.application.services.inventory_service import InventoryService
from src.domain.inventory.models import Item
from src.settings.app_config import WEB_HOST, WEB_PORT, WEB_THREADS
from src.settings.timing import (
    DEMO_FIRST_CHECK_WAIT,
    DEMO_FIRST_EXPIRY_SECONDS,
    DEMO_SECOND_CHECK_WAIT,
    DEMO_SECOND_EXPIRY_SECONDS,
)
from src.utils.logger import cleanup_old_logs, get_logger

logger = get_logger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """CLI 파서 생성"""
    parser = argparse.ArgumentParser(
        prog="perishable-inventory",
        description="인메모리 재고 유통기한 알림 CLI",
    )

    subparsers = parser.add_subparsers(dest="command", help="명령")

    subparsers.add_parser("demo", help="꺼내기/만료 알림 시나리오 실행")

    serve_parser = subparsers.add_parser("serve", help="웹 대시보드 실행 (waitress)")
    serve_parser.add_argument("--host", default=WEB_HOST, help=f"바인딩 호스트 (기본: {WEB_HOST})")
    serve_parser.add_argument("--port", type=int, default=WEB_PORT, help=f"포트 번호 (기본: {WEB_PORT})")
    serve_parser.add_argument("--threads", type=int, default=WEB_THREADS, help=f"워커 스레드 수 (기본: {WEB_THREADS})")

    return parser


def _print_notifications(title: str, notifications: List[str]) -> None:
    print(f"\n[{title}] 알림 {len(notifications)}건")
    for note in notifications:
        print(f"  - {note}")


def run_demo() -> int:
    """꺼내기 알림 + 만료 알림 시나리오"""
    # 꺼내기: 없는 라벨은 알림 없음, 있는 라벨은 removed 1건
    with InventoryService() as inventory:
        inventory.add(Item("first item", "first type", datetime.now() + timedelta(days=1)))
        inventory.remove("second item")
        _print_notifications("없는 라벨 꺼내기 후", inventory.list_notifications())
        inventory.remove("first item")
        _print_notifications("first item 꺼내기 후", inventory.list_notifications())

    # 만료: 1초 / 4초 후 만료되는 상품이 순서대로 expired
    with InventoryService() as inventory:
        now = datetime.now()
        inventory.add(Item("first item", "first type", now + timedelta(seconds=DEMO_FIRST_EXPIRY_SECONDS)))
        inventory.add(Item("second item", "first type", now + timedelta(seconds=DEMO_SECOND_EXPIRY_SECONDS)))

        time.sleep(DEMO_FIRST_CHECK_WAIT)
        _print_notifications(f"{DEMO_FIRST_CHECK_WAIT}초 후", inventory.list_notifications())

        time.sleep(DEMO_SECOND_CHECK_WAIT)
        _print_notifications(
            f"{DEMO_FIRST_CHECK_WAIT + DEMO_SECOND_CHECK_WAIT:.1f}초 후",
            inventory.list_notifications(),
        )
    return 0


def run_serve(host: str, port: int, threads: int) -> int:
    """waitress로 웹 대시보드 실행"""
    from waitress import serve

    from src.web.app import create_app

    app = create_app()
    logger.info(f"Inventory Dashboard starting on http://{host}:{port}")
    try:
        serve(app, host=host, port=port, threads=threads)
    except KeyboardInterrupt:
        logger.info("서버 종료")
    finally:
        app.extensions["inventory"].close()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    cleanup_old_logs(max_age_days=30, max_file_mb=50)

    if args.command == "demo":
        return run_demo()
    if args.command == "serve":
        return run_serve(args.host, args.port, args.threads)
    return 1


if __name__ == "__main__":
    sys.exit(main())
