"""Dependency injection for FastAPI endpoints"""

from datetime import date

from fastapi import Request

from solarfin.config import Settings, settings


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_today() -> date:
    """Reference date used when a request does not carry one"""
    return date.today()


def get_settings() -> Settings:
    return settings
