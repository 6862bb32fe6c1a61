"""재고 REST API

InventoryService의 add / remove / list_notifications 를 HTTP로 노출합니다.
"""

import math
from datetime import datetime, timedelta

from flask import Blueprint, current_app, jsonify, request

from src.domain.inventory.exceptions import InvalidItemError
from src.domain.inventory.models import Item
from src.settings.constants import DEFAULT_ITEM_TYPE, MAX_LABEL_LENGTH
from src.utils.logger import get_logger

logger = get_logger(__name__)

inventory_bp = Blueprint("inventory", __name__)


def _inventory():
    return current_app.extensions["inventory"]


def _bad_request(message: str):
    return jsonify({"error": message, "code": "INVALID_ITEM"}), 400


def _parse_item(body: dict) -> Item:
    """요청 본문 → Item

    Body:
        label: 라벨 (필수)
        type: 상품 종류 (기본: DEFAULT_ITEM_TYPE)
        expiration: ISO-8601 유통기한 (expires_in_seconds와 택1)
        expires_in_seconds: 지금부터 N초 후 만료

    Raises:
        InvalidItemError: 필수값 누락 또는 형식 오류
    """
    label = body.get("label")
    if not isinstance(label, str) or not label.strip():
        raise InvalidItemError("label은 비어있지 않은 문자열이어야 합니다")
    if len(label) > MAX_LABEL_LENGTH:
        raise InvalidItemError(f"label은 {MAX_LABEL_LENGTH}자 이하여야 합니다")

    item_type = body.get("type") or DEFAULT_ITEM_TYPE
    if not isinstance(item_type, str):
        raise InvalidItemError("type은 문자열이어야 합니다")

    if body.get("expiration") is not None:
        try:
            expiration = datetime.fromisoformat(str(body["expiration"]))
        except ValueError:
            raise InvalidItemError(f"expiration 형식 오류: {body['expiration']}")
    elif body.get("expires_in_seconds") is not None:
        raw = body["expires_in_seconds"]
        try:
            seconds = float(raw)
            if not math.isfinite(seconds):
                raise ValueError(raw)
            expiration = datetime.now() + timedelta(seconds=seconds)
        except (TypeError, ValueError, OverflowError):
            raise InvalidItemError(f"expires_in_seconds 형식 오류: {raw}")
    else:
        raise InvalidItemError("expiration 또는 expires_in_seconds가 필요합니다")

    if expiration.tzinfo is not None:
        # 인벤토리는 로컬 naive 시각 기준
        expiration = expiration.astimezone().replace(tzinfo=None)

    return Item(label=label, item_type=item_type, expiration=expiration)


@inventory_bp.route("/items", methods=["GET"])
def list_items():
    """현재 재고 목록 (입고 순)"""
    items = _inventory().list_items()
    return jsonify({
        "total": len(items),
        "items": [item.to_dict() for item in items],
    })


@inventory_bp.route("/items", methods=["POST"])
def add_item():
    """상품 추가

    Body (JSON):
        {"label": "milk", "type": "dairy", "expiration": "2026-10-22T09:00:00"}
        {"label": "milk", "type": "dairy", "expires_in_seconds": 30}
    """
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        return _bad_request("JSON 객체 본문이 필요합니다")

    try:
        item = _parse_item(body)
        _inventory().add(item)
    except InvalidItemError as e:
        logger.warning(f"상품 추가 거부: {e}")
        return _bad_request(str(e))

    return jsonify({"item": item.to_dict()}), 201


@inventory_bp.route("/items/<path:label>", methods=["DELETE"])
def remove_item(label):
    """라벨로 상품 꺼내기 (중복 시 가장 먼저 입고된 1건)"""
    item = _inventory().remove(label)
    if item is None:
        return jsonify({"error": f"라벨 '{label}' 상품이 없습니다", "code": "NOT_FOUND"}), 404
    return jsonify({"item": item.to_dict()})


@inventory_bp.route("/notifications", methods=["GET"])
def list_notifications():
    """알림 목록 (발생 순)

    Query params:
        detail: 1이면 레코드 상세(kind, item, recorded_at) 포함
    """
    if request.args.get("detail") == "1":
        records = _inventory().notification_records()
        return jsonify({
            "total": len(records),
            "notifications": [record.to_dict() for record in records],
        })

    notifications = _inventory().list_notifications()
    return jsonify({
        "total": len(notifications),
        "notifications": notifications,
    })


@inventory_bp.route("/status", methods=["GET"])
def status():
    """재고 수 / 스케줄러 상태 / 다음 만료 시각"""
    inventory = _inventory()
    next_expiration = inventory.next_expiration()
    return jsonify({
        "item_count": len(inventory),
        "scheduler_state": inventory.scheduler_state.value,
        "next_expiration": next_expiration.isoformat() if next_expiration else None,
    })
