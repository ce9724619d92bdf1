# dental_core/conftest.py
from datetime import date
from decimal import Decimal

import pytest
from django.conf import settings
from rest_framework.test import APIClient

from dental_core.common.storage import _MEMORY_STORAGE
from dental_core.iam.auth import DemoAuthService
from dental_core.procedures.services import ProcedureTemplateService
from dental_core.store.state import ClinicState


@pytest.fixture(autouse=True)
def memory_storage():
    """
    Every test starts from an empty slot store (i.e. the seed dataset) and
    leaves nothing behind.
    """
    _MEMORY_STORAGE.clear()
    yield _MEMORY_STORAGE
    _MEMORY_STORAGE.clear()


@pytest.fixture
def state(memory_storage):
    return ClinicState.open(memory_storage)


@pytest.fixture
def reopen(memory_storage):
    """Fresh ClinicState over the same slots (simulates an application restart)."""
    return lambda: ClinicState.open(memory_storage)


@pytest.fixture
def demo_credentials():
    creds = settings.DENTALTRACK_DEMO_CREDENTIALS
    return {"email": creds["email"], "password": creds["password"]}


@pytest.fixture
def anon_client():
    return APIClient()


@pytest.fixture
def api_client(memory_storage, demo_credentials):
    DemoAuthService(memory_storage).login(**demo_credentials)
    return APIClient()


@pytest.fixture
def root_canal(state):
    """Template "Root Canal" with four stages ordered 1..4."""
    template = ProcedureTemplateService.create_template(
        state,
        name="Root Canal",
        category="Endodontia",
        base_cost=Decimal("800.00"),
        estimated_duration="1-3 sessões",
    )
    for name, checklist in (
        ("Diagnosis", ("X-ray", "Vitality test")),
        ("Opening", ("Isolation",)),
        ("Filling", ()),
        ("Final restoration", ("Occlusal adjustment",)),
    ):
        ProcedureTemplateService.add_stage(state, template_id=template.id, name=name, checklist_items=checklist)
    return template


@pytest.fixture
def start_date():
    return date(2024, 11, 20)
