"""
Shared dependencies for FastAPI routes.
"""

from typing import Optional

from fastapi import Header, HTTPException
from sqlalchemy.orm import Session
from config import get_db_instance


def get_db() -> Session:
    """Get database session dependency for FastAPI routes."""
    db = get_db_instance()
    session = db.get_session()
    try:
        yield session
    finally:
        session.close()


def get_optional_user_id(
    x_user_id: Optional[str] = Header(None, description="Authenticated user ID"),
) -> Optional[str]:
    """Caller identity as forwarded by the auth layer, if any."""
    if x_user_id is None or not x_user_id.strip():
        return None
    return x_user_id.strip()


def get_current_user_id(
    x_user_id: Optional[str] = Header(None, description="Authenticated user ID"),
) -> str:
    """Caller identity; 401 when the request is anonymous."""
    user_id = get_optional_user_id(x_user_id)
    if user_id is None:
        raise HTTPException(status_code=401, detail="Please sign in to continue")
    return user_id


def get_client_id(
    x_client_id: Optional[str] = Header(
        None, description="Opaque browser ID that owns the comparison basket"
    ),
) -> str:
    """Anonymous client identity for the comparison basket."""
    if x_client_id is None or not x_client_id.strip():
        raise HTTPException(status_code=400, detail="X-Client-Id header is required")
    return x_client_id.strip()
