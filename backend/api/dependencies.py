"""Shared dependencies for API routes."""

from fastapi import Header, HTTPException

from config import settings
from services.catalog import Catalog
from services.storage import AttemptStore, PersonalInfoStore

_catalog = Catalog(settings.catalog_dir)
_attempts = AttemptStore()
_personal_info = PersonalInfoStore()


def get_catalog() -> Catalog:
    return _catalog


def get_attempt_store() -> AttemptStore:
    return _attempts


def get_personal_info_store() -> PersonalInfoStore:
    return _personal_info


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    """Caller identity. Authentication happens upstream; we only need the id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Authentication required")
    return x_user_id
