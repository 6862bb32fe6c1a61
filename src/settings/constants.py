"""
재고 알림 시스템 - 비즈니스 상수
- 알림 문구
- 스케줄러 스레드
- API 기본값

정식 경로: from src.settings.constants import ...
"""

# =====================================================================
# 알림 문구 (NotificationKind.value -> 접두어)
# =====================================================================
NOTIFICATION_REMOVED_PREFIX = "Item removed"
NOTIFICATION_EXPIRED_PREFIX = "Item expired"

NOTIFICATION_PREFIXES = {
    "removed": NOTIFICATION_REMOVED_PREFIX,
    "expired": NOTIFICATION_EXPIRED_PREFIX,
}

# =====================================================================
# 스케줄러
# =====================================================================
SCHEDULER_THREAD_NAME = "expiry-scheduler"

# =====================================================================
# 웹 API
# =====================================================================
API_PREFIX = "/api/inventory"
MAX_LABEL_LENGTH = 200          # 라벨 최대 길이 (문자)
DEFAULT_ITEM_TYPE = "general"   # type 미지정 시 기본값
