from functools import lru_cache
from typing import Generator, Optional
from uuid import UUID

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from grading.db import session_scope
from grading.exceptions import UserNotFound
from grading.managers.judge_client import JudgeClient
from grading.models.database import User
from grading.repositories.user_repository import UserRepository


def get_db() -> Generator[Session, None, None]:
    yield from session_scope()


@lru_cache(maxsize=1)
def get_judge_client() -> JudgeClient:
    return JudgeClient()


def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Identity resolved by the upstream auth layer and forwarded as X-User-Id."""
    if not x_user_id:
        raise HTTPException(status_code=401, detail="authentication_required")
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="invalid_user_id")
    try:
        return UserRepository(db).get_by_id(user_id)
    except UserNotFound:
        raise HTTPException(status_code=401, detail="unknown_user")


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=403, detail="admin_required")
    return user
