from typing import Dict, Iterable, Optional
from uuid import UUID

from shared.core.database import AuthSessionLocal
from shared.models.users import Users


def get_user_summary(user: Optional[Users]) -> Optional[dict]:
    if not user:
        return None
    return {"id": user.id, "email": user.email, "full_name": user.full_name}


def get_users_bulk(user_ids: Iterable[UUID]) -> Dict[UUID, Users]:
    ids = {uid for uid in user_ids if uid is not None}
    if not ids:
        return {}

    auth_db = AuthSessionLocal()
    try:
        users = (
            auth_db.query(Users)
            .filter(Users.id.in_(ids))
            .all()
        )

        return {u.id: u for u in users}
    finally:
        auth_db.close()
