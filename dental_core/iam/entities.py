# dental_core/iam/entities.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.db import models

from dental_core.common.collections import UNSET, Patch


class UserRole(models.TextChoices):
    ADMIN = "admin", "Admin"
    DENTIST = "dentist", "Dentist"
    RECEPTION = "reception", "Reception"


# Roles that can be responsible for a treatment
CLINICAL_ROLES = frozenset({UserRole.DENTIST, UserRole.ADMIN})


@dataclass(frozen=True)
class User:
    """
    Clinic staff member (Team). Deleting one leaves treatments that point at
    it untouched.
    """
    id: str
    name: str
    role: str
    email: str
    specialty: Optional[str] = None


@dataclass(frozen=True)
class UserPatch(Patch):
    name: str = UNSET
    role: str = UNSET
    email: str = UNSET
    specialty: Optional[str] = UNSET


@dataclass(frozen=True)
class SessionUser:
    """Identity marker persisted by the demo login."""
    email: str
    name: str
    role: str

    @property
    def is_authenticated(self) -> bool:
        return True
