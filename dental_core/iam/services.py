# dental_core/iam/services.py
from __future__ import annotations

import logging
from typing import Optional

from rest_framework.exceptions import NotFound

from dental_core.common.collections import generate_id
from dental_core.iam.entities import User, UserPatch
from dental_core.store.state import ClinicState

logger = logging.getLogger(__name__)


class UserService:
    """
    Team management.

    Deleting a user does not touch treatments or financial records that
    reference it.
    """

    @staticmethod
    def create_user(
        state: ClinicState,
        *,
        name: str,
        role: str,
        email: str,
        specialty: Optional[str] = None,
    ) -> User:
        user = User(id=generate_id(), name=name, role=role, email=email, specialty=specialty or None)
        state.users.add(user)
        logger.info("User %s created (role=%s)", user.id, role)
        return user

    @staticmethod
    def update_user(state: ClinicState, *, user_id: str, patch: UserPatch) -> User:
        user = state.users.update(user_id, patch)
        if user is None:
            raise NotFound("User not found.")
        return user

    @staticmethod
    def delete_user(state: ClinicState, *, user_id: str) -> User:
        user = state.users.delete(user_id)
        if user is None:
            raise NotFound("User not found.")
        logger.info("User %s deleted", user_id)
        return user
