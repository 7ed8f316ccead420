"""Dependency injection for FastAPI endpoints"""

from fastapi import Request

from finance_tracker.infrastructure.database.store import LedgerStore


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_store(request: Request) -> LedgerStore:
    """Provide the ledger store created by the application factory"""
    return request.app.state.store
