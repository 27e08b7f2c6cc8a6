"""
Dependencies for FastAPI routes.
"""
from fastapi import Request

from config import Settings
from Store_module.record_store import RecordStore


def get_store(request: Request) -> RecordStore:
    """The record store built at startup and attached to the application."""
    return request.app.state.store


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings
