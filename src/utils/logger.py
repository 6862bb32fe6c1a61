"""
통합 로깅 모듈

사용법:
    from src.utils.logger import get_logger

    logger = get_logger(__name__)
    logger.info("상품 추가")
    logger.warning("라벨 없음")
    logger.error("만료 처리 실패", exc_info=True)
"""

import logging
import sys
from pathlib import Path
from datetime import datetime, timedelta
from logging.handlers import RotatingFileHandler
from typing import Any

from src.settings.app_config import LOG_DIR


LOG_DIR.mkdir(parents=True, exist_ok=True)


class SafeRotatingFileHandler(RotatingFileHandler):
    """파일 잠금에 안전한 RotatingFileHandler

    로그 파일이 다른 프로세스에 잠겨 로테이션이 실패하면
    PermissionError를 무시하고 기존 파일에 계속 쓴다.
    """

    def doRollover(self):
        try:
            super().doRollover()
        except PermissionError:
            # 로테이션 실패 → stream이 닫혀있으면 다시 열기
            if self.stream is None and not self.delay:
                self.stream = self._open()


# 로그 포맷
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_FORMAT_SIMPLE = "%(asctime)s | %(levelname)-8s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

LOG_TAIL_KEEP_BYTES = 2 * 1024 * 1024  # 비대한 로그 정리 시 유지할 크기


LOG_FILES = {
    "main": LOG_DIR / "inventory.log",           # 전체 로그
    "scheduler": LOG_DIR / "scheduler.log",      # 만료 스케줄러
    "web": LOG_DIR / "web.log",                  # 웹 API
    "error": LOG_DIR / "error.log",              # 에러만
}

# 이미 설정된 로거 추적
_configured_loggers = set()


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: str = "main",
    console: bool = True,
    max_bytes: int = 20 * 1024 * 1024,  # 20MB
    backup_count: int = 10
) -> logging.Logger:
    """
    로거 설정

    Args:
        name: 로거 이름 (보통 __name__)
        level: 로그 레벨
        log_file: 로그 파일 키 ("main", "scheduler", "web")
        console: 콘솔 출력 여부
        max_bytes: 파일당 최대 크기
        backup_count: 백업 파일 수

    Returns:
        설정된 Logger
    """
    logger = logging.getLogger(name)

    if name in _configured_loggers:
        return logger

    logger.setLevel(level)

    # 이미 핸들러가 있으면 스킵
    if logger.handlers:
        _configured_loggers.add(name)
        return logger

    formatter = logging.Formatter(LOG_FORMAT, DATE_FORMAT)
    simple_formatter = logging.Formatter(LOG_FORMAT_SIMPLE, DATE_FORMAT)

    # 파일 핸들러 (로테이션)
    file_path = LOG_FILES.get(log_file, LOG_FILES["main"])
    try:
        file_handler = SafeRotatingFileHandler(
            file_path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)
    except OSError as e:
        print(f"[WARN] 로그 파일 핸들러 설정 실패: {e}")

    # 에러 전용 파일 핸들러
    try:
        error_handler = SafeRotatingFileHandler(
            LOG_FILES["error"],
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding='utf-8'
        )
        error_handler.setFormatter(formatter)
        error_handler.setLevel(logging.ERROR)
        logger.addHandler(error_handler)
    except OSError as e:
        print(f"[WARN] 에러 로그 파일 핸들러 설정 실패: {e}")

    if console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(simple_formatter)
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    # 상위 로거로 전파 방지
    logger.propagate = False

    _configured_loggers.add(name)
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    로거 가져오기 (편의 함수)

    모듈별 자동 분류:
        - *scheduler* → scheduler.log
        - src.web.* → web.log
        - 그 외 → inventory.log

    Args:
        name: 모듈 이름 (보통 __name__)

    Returns:
        모듈에 맞게 설정된 Logger 인스턴스
    """
    if "scheduler" in name:
        return setup_logger(name, log_file="scheduler")
    elif "web" in name:
        return setup_logger(name, log_file="web")
    return setup_logger(name, log_file="main")


class LoggerMixin:
    """
    클래스용 로거 믹스인

    사용법:
        class ExpiryScheduler(LoggerMixin):
            def fire(self):
                self.logger.info("만료 처리 시작")
    """

    @property
    def logger(self) -> logging.Logger:
        if not hasattr(self, '_logger'):
            self._logger = get_logger(self.__class__.__module__)
        return self._logger


def log_with_context(
    _logger: logging.Logger,
    level: str,
    msg: str,
    exc_info: bool = False,
    **ctx: Any,
) -> None:
    """컨텍스트 키워드를 자동 포맷하는 로깅 헬퍼

    Args:
        _logger: 로거 인스턴스
        level: 로그 레벨 ("debug", "info", "warning", "error")
        msg: 로그 메시지
        exc_info: True면 예외 스택 트레이스 포함
        **ctx: 컨텍스트 키=값 쌍 (label, seq, expiration 등)

    Usage:
        log_with_context(logger, "info", "상품 제거",
                        label="milk", seq=3)
        # Output: "상품 제거 | label=milk | seq=3"
    """
    if ctx:
        ctx_str = " | ".join(f"{k}={v}" for k, v in ctx.items() if v is not None)
        if ctx_str:
            msg = f"{msg} | {ctx_str}"

    log_fn = getattr(_logger, level, None) or _logger.info
    log_fn(msg, exc_info=exc_info)


def cleanup_old_logs(max_age_days: int = 30, max_file_mb: int = 50) -> None:
    """앱 시작 시 로그 디렉터리 정리

    - 로테이션 백업(inventory.log.3 등) 중 max_age_days보다 오래된 파일 삭제
    - LOG_FILES의 현재 로그가 max_file_mb를 넘으면 최근 LOG_TAIL_KEEP_BYTES만 남김
    """
    if not LOG_DIR.exists():
        return

    cutoff = (datetime.now() - timedelta(days=max_age_days)).timestamp()
    for backup in LOG_DIR.glob("*.log.*"):
        if not backup.suffix[1:].isdigit():
            continue
        try:
            if backup.stat().st_mtime < cutoff:
                backup.unlink()
        except PermissionError:
            continue  # 다른 프로세스가 사용 중

    limit = max_file_mb * 1024 * 1024
    for path in LOG_FILES.values():
        try:
            if path.exists() and path.stat().st_size > limit:
                _keep_log_tail(path, LOG_TAIL_KEEP_BYTES)
        except PermissionError:
            continue


def _keep_log_tail(path: Path, keep_bytes: int) -> None:
    """로그 파일의 마지막 keep_bytes만 남긴다 (첫 줄은 줄 경계부터)"""
    size = path.stat().st_size
    if size <= keep_bytes:
        return

    with open(path, "rb") as f:
        f.seek(size - keep_bytes)
        f.readline()
        tail = f.read()

    path.write_bytes(b"[LOG TRUNCATED]\n" + tail)
