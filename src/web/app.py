"""Flask 앱 생성"""
import secrets
from pathlib import Path
from typing import Optional

from flask import Flask, jsonify, request

from src.application.services.inventory_service import InventoryService
from src.settings.app_config import FLASK_SECRET_KEY, PROJECT_ROOT
from src.utils.logger import get_logger

logger = get_logger(__name__)


def create_app(inventory: Optional[InventoryService] = None) -> Flask:
    """Flask 앱 팩토리

    Args:
        inventory: 주입할 InventoryService (테스트용). 없으면 새로 생성
    """
    app = Flask(
        __name__,
        template_folder=str(Path(__file__).parent / "templates"),
    )
    app.config["PROJECT_ROOT"] = str(PROJECT_ROOT)
    app.config["SECRET_KEY"] = FLASK_SECRET_KEY or secrets.token_hex(32)
    app.json.ensure_ascii = False

    # 프로세스 수명 동안 유지되는 인메모리 재고
    app.extensions["inventory"] = inventory if inventory is not None else InventoryService()

    from .routes import register_blueprints

    register_blueprints(app)

    @app.before_request
    def log_request():
        """접근 로깅"""
        logger.info(f"[API] {request.method} {request.path} from {request.remote_addr}")

    @app.after_request
    def add_security_headers(response):
        """보안 헤더 추가"""
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        response.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'
        response.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate'
        return response

    # 전역 에러 핸들러 (일관된 JSON 응답)
    @app.errorhandler(404)
    def not_found(e):
        return jsonify({"error": "요청한 리소스를 찾을 수 없습니다", "code": "NOT_FOUND"}), 404

    @app.errorhandler(500)
    def internal_error(e):
        return jsonify({"error": "서버 내부 오류가 발생했습니다", "code": "INTERNAL_ERROR"}), 500

    @app.errorhandler(400)
    def bad_request(e):
        return jsonify({"error": "잘못된 요청입니다", "code": "BAD_REQUEST"}), 400

    @app.errorhandler(405)
    def method_not_allowed(e):
        return jsonify({"error": "허용되지 않는 HTTP 메서드입니다", "code": "METHOD_NOT_ALLOWED"}), 405

    return app


if __name__ == "__main__":
    app = create_app()
    print("Inventory Dashboard starting on http://localhost:5000")
    app.run(host="127.0.0.1", port=5000, debug=False)
