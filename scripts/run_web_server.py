"""프로덕션 웹 서버 (waitress)

Usage:
    python scripts/run_web_server.py
    python scripts/run_web_server.py --host 0.0.0.0 --port 8080
"""

import argparse
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from src.settings.app_config import WEB_HOST, WEB_PORT, WEB_THREADS  # noqa: E402


def main():
    parser = argparse.ArgumentParser(description="재고 유통기한 알림 웹 서버")
    parser.add_argument("--host", default=WEB_HOST, help=f"바인딩 호스트 (기본: {WEB_HOST})")
    parser.add_argument("--port", type=int, default=WEB_PORT, help=f"포트 번호 (기본: {WEB_PORT})")
    parser.add_argument("--threads", type=int, default=WEB_THREADS, help=f"워커 스레드 수 (기본: {WEB_THREADS})")
    args = parser.parse_args()

    from src.presentation.cli.main import run_serve

    print(f"Inventory Dashboard starting on http://{args.host}:{args.port}")
    print("  Ctrl+C to stop")
    return run_serve(args.host, args.port, args.threads)


if __name__ == "__main__":
    sys.exit(main())
