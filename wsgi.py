"""WSGI entry point.

WSGI 서버 설정 파일에서 이 파일을 import합니다:

    import sys
    path = '/home/USERNAME/perishable-inventory'
    if path not in sys.path:
        sys.path.insert(0, path)
    from wsgi import application

인벤토리는 프로세스 메모리에 있으므로 워커 프로세스는 1개로 운영해야 합니다.
"""

from src.web.app import create_app

application = create_app()
