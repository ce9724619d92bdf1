# dental_core/store/state.py
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from dental_core.billing.entities import FinancialRecord
from dental_core.billing.serializers import FinancialRecordSerializer
from dental_core.common.collections import EntityCollection
from dental_core.common.storage import (
    CollectionRepository,
    LoadResult,
    SlotStorage,
    StorageError,
    get_slot_storage,
    slot_key,
)
from dental_core.iam.entities import User
from dental_core.iam.serializers import UserSerializer
from dental_core.patients.entities import Patient
from dental_core.patients.serializers import PatientSerializer
from dental_core.procedures.entities import ProcedureTemplate, ProcedureTemplateStage, StageTemplate
from dental_core.procedures.serializers import (
    ProcedureTemplateSerializer,
    ProcedureTemplateStageSerializer,
    StageTemplateSerializer,
)
from dental_core.store import seed
from dental_core.treatments.entities import Treatment, TreatmentStage
from dental_core.treatments.serializers import TreatmentSerializer, TreatmentStageSerializer

logger = logging.getLogger(__name__)


# (attribute, slot name, codec, seed factory)
COLLECTIONS: tuple[tuple[str, str, type, Callable[[], list]], ...] = (
    ("users", "users", UserSerializer, seed.seed_users),
    ("patients", "patients", PatientSerializer, seed.seed_patients),
    ("procedure_templates", "procedureTemplates", ProcedureTemplateSerializer, seed.seed_procedure_templates),
    (
        "procedure_template_stages",
        "procedureTemplateStages",
        ProcedureTemplateStageSerializer,
        seed.seed_procedure_template_stages,
    ),
    ("stage_templates", "stageTemplates", StageTemplateSerializer, seed.seed_stage_templates),
    ("treatments", "treatments", TreatmentSerializer, seed.seed_treatments),
    ("treatment_stages", "treatmentStages", TreatmentStageSerializer, seed.seed_treatment_stages),
    ("financial_records", "financialRecords", FinancialRecordSerializer, seed.seed_financial_records),
)


class ClinicState:
    """
    Application state: the eight entity collections plus their persistence.

    Built once by the composition root (ClinicStateMiddleware, management
    commands, tests) and handed to selectors/services explicitly.

    Every collection mutation is written to its slot immediately, except inside
    unit_of_work(), where writes are deferred until the block succeeds and
    rolled back in memory if it raises.
    """

    users: EntityCollection[User]
    patients: EntityCollection[Patient]
    procedure_templates: EntityCollection[ProcedureTemplate]
    procedure_template_stages: EntityCollection[ProcedureTemplateStage]
    stage_templates: EntityCollection[StageTemplate]
    treatments: EntityCollection[Treatment]
    treatment_stages: EntityCollection[TreatmentStage]
    financial_records: EntityCollection[FinancialRecord]

    def __init__(self, repository: CollectionRepository) -> None:
        self.repository = repository
        self.load_results: dict[str, LoadResult] = {}
        self._collections: dict[str, EntityCollection] = {}
        self._slots: dict[str, str] = {}
        self._dirty: Optional[set[str]] = None

        for attr, slot_name, codec, seed_factory in COLLECTIONS:
            key = slot_key(slot_name)
            result = repository.load(key, codec, seed_factory())
            self.load_results[attr] = result

            collection = EntityCollection(
                name=attr,
                codec=codec,
                seed=seed_factory,
                items=result.items,
                on_change=self._persist,
            )
            self._collections[attr] = collection
            self._slots[attr] = key
            setattr(self, attr, collection)

    @classmethod
    def open(cls, storage: Optional[SlotStorage] = None) -> "ClinicState":
        return cls(CollectionRepository(storage or get_slot_storage()))

    @property
    def collections(self) -> dict[str, EntityCollection]:
        return dict(self._collections)

    # -------------------------
    # Persistence
    # -------------------------
    def _persist(self, collection: EntityCollection) -> None:
        if self._dirty is not None:
            self._dirty.add(collection.name)
            return
        self.repository.save(self._slots[collection.name], collection.codec, collection.all())

    @contextmanager
    def unit_of_work(self) -> Iterator["ClinicState"]:
        """
        All-or-nothing block over several collections.

        Nested blocks join the outer one. Dirty slots are written together on
        exit; if any write fails, memory and the slots already written are put
        back and StorageError propagates.
        """
        if self._dirty is not None:
            yield self
            return

        snapshots = {name: c.snapshot() for name, c in self._collections.items()}
        self._dirty = set()
        try:
            yield self
        except Exception:
            for name, items in snapshots.items():
                self._collections[name].restore(items)
            self._dirty = None
            logger.info("Unit of work rolled back")
            raise

        dirty, self._dirty = self._dirty, None
        written: dict[str, Optional[str]] = {}
        try:
            with self.repository.atomic():
                for name in sorted(dirty):
                    key = self._slots[name]
                    previous = self.repository.read_raw(key)
                    collection = self._collections[name]
                    if not self.repository.save(key, collection.codec, collection.all()):
                        raise StorageError(f"Cannot persist slot {key!r}")
                    written[key] = previous
        except StorageError:
            # Raising inside atomic() rolls back the DB backend; restore_raw
            # covers backends that already kept the earlier slots
            for name, items in snapshots.items():
                self._collections[name].restore(items)
            self.repository.restore_raw(written)
            logger.error("Unit of work rolled back: storage write failed")
            raise

    def reset_all_data(self) -> None:
        """Restore every collection to the embedded seed, discarding all edits."""
        with self.unit_of_work():
            for collection in self._collections.values():
                collection.reset()
        logger.info("All collections reset to seed data")
