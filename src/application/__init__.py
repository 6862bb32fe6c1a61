"""
Application 계층 -- 만료 스케줄러 + 재고 서비스

Usage:
    from src.application.services.inventory_service import InventoryService
    from src.application.scheduler.expiry_scheduler import ExpiryScheduler, SchedulerState
"""
