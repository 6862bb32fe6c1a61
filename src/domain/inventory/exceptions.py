"""
재고 도메인 예외

- InvalidItemError: 호출자 입력 오류 (None 상품 등). 상태 변경 없음.
- InventoryClosedError: close() 이후 add/remove 호출. 상태 변경 없음.
- IndexInconsistencyError: 내부 불변식 위반. 발생하면 버그이므로 삼키지 않는다.

라벨 미존재(NotFound)는 예외가 아니라 None 반환으로 표현한다.
"""


class InventoryError(Exception):
    """재고 도메인 예외 기본 클래스"""
    pass


class InvalidItemError(InventoryError, ValueError):
    """add()에 유효하지 않은 상품이 전달됨"""
    pass


class InventoryClosedError(InventoryError, RuntimeError):
    """이미 종료된 인벤토리에 변경 요청"""
    pass


class IndexInconsistencyError(InventoryError, RuntimeError):
    """ItemStore / ExpirationIndex / 스케줄러 상태 불일치"""
    pass
