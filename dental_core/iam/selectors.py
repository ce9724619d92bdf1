# dental_core/iam/selectors.py
from __future__ import annotations

from typing import Optional

from dental_core.common.collections import get_by_id
from dental_core.iam.entities import CLINICAL_ROLES, User
from dental_core.store.state import ClinicState


def get_user(state: ClinicState, user_id: Optional[str]) -> Optional[User]:
    return get_by_id(state.users, user_id)


def list_users(state: ClinicState, *, role: Optional[str] = None, q: Optional[str] = None) -> list[User]:
    users = state.users.all()
    if role:
        users = [u for u in users if u.role == role]

    qv = (q or "").strip().lower()
    if qv:
        users = [u for u in users if qv in u.name.lower() or qv in u.email.lower()]
    return users


def list_dentists(state: ClinicState) -> list[User]:
    """Users that can be made responsible for a treatment."""
    return state.users.filter(lambda u: u.role in CLINICAL_ROLES)
