# dental_core/patients/entities.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from dental_core.common.collections import UNSET, Patch


@dataclass(frozen=True)
class Patient:
    id: str
    name: str
    national_id: str
    phone: str
    email: str
    birth_date: date
    address: str
    created_at: date
    insurance_id: Optional[str] = None
    insurance_name: Optional[str] = None


@dataclass(frozen=True)
class PatientPatch(Patch):
    name: str = UNSET
    national_id: str = UNSET
    phone: str = UNSET
    email: str = UNSET
    birth_date: date = UNSET
    address: str = UNSET
    insurance_id: Optional[str] = UNSET
    insurance_name: Optional[str] = UNSET
