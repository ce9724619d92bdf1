from io import StringIO

from django.core.management import call_command

from dental_core.iam.auth import DemoAuthService
from dental_core.store.state import ClinicState


def test_reset_demo_data_restores_seed(memory_storage, demo_credentials):
    state = ClinicState.open()
    state.patients.delete_where(lambda p: True)
    DemoAuthService().login(**demo_credentials)

    out = StringIO()
    call_command("reset_demo_data", "--logout", stdout=out)

    assert len(ClinicState.open().patients) == 6
    assert DemoAuthService().current_user() is None
    assert "patients: 6" in out.getvalue()
    assert "Demo data reset." in out.getvalue()
