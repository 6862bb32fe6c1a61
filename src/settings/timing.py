"""
타이밍 설정
- 스케줄러 스레드 종료 대기
- 데모 시나리오 시간

정식 경로: from src.settings.timing import ...
"""

# =====================================================================
# 스케줄러
# =====================================================================
TIMER_JOIN_TIMEOUT = 2.0        # close() 시 타이머 스레드 종료 대기 (초)
TIMER_MAX_WAIT_SECONDS = 3600.0 # 1회 대기 상한 (초). 먼 유통기한은 여러 번 나눠 대기

# =====================================================================
# 데모 시나리오 (CLI demo)
# =====================================================================
DEMO_FIRST_EXPIRY_SECONDS = 1   # 첫 상품 유통기한 (초)
DEMO_SECOND_EXPIRY_SECONDS = 4  # 두 번째 상품 유통기한 (초)
DEMO_FIRST_CHECK_WAIT = 1.1     # 첫 확인까지 대기 (초)
DEMO_SECOND_CHECK_WAIT = 3.3    # 두 번째 확인까지 추가 대기 (초)
