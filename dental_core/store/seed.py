# dental_core/store/seed.py
"""
Embedded demo dataset.

Every collection starts from these values on first run and after
reset_all_data(). Each accessor returns a fresh list.
"""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from dental_core.billing.entities import FinancialRecord, RecordStatus, RecordType, ResponsibleType
from dental_core.iam.entities import User, UserRole
from dental_core.patients.entities import Patient
from dental_core.procedures.entities import ProcedureTemplate, ProcedureTemplateStage, StageTemplate
from dental_core.treatments.entities import StageStatus, Treatment, TreatmentStage, TreatmentStatus


def seed_users() -> list[User]:
    return [
        User(id="1", name="Dr. Carlos Silva", role=UserRole.ADMIN, email="carlos@dentaltrack.com", specialty="Implantodontia"),
        User(id="2", name="Dra. Marina Santos", role=UserRole.DENTIST, email="marina@dentaltrack.com", specialty="Ortodontia"),
        User(id="3", name="Dr. Roberto Lima", role=UserRole.DENTIST, email="roberto@dentaltrack.com", specialty="Endodontia"),
        User(id="4", name="Ana Paula Costa", role=UserRole.RECEPTION, email="ana@dentaltrack.com"),
        User(id="5", name="Juliana Mendes", role=UserRole.RECEPTION, email="juliana@dentaltrack.com"),
    ]


def seed_patients() -> list[Patient]:
    return [
        Patient(
            id="1",
            name="João Pedro Oliveira",
            national_id="123.456.789-00",
            phone="(11) 99999-1234",
            email="joao@email.com",
            birth_date=date(1985, 3, 15),
            insurance_id="UNIMED-12345",
            insurance_name="Unimed",
            address="Rua das Flores, 123 - São Paulo, SP",
            created_at=date(2024, 1, 10),
        ),
        Patient(
            id="2",
            name="Maria Fernanda Silva",
            national_id="234.567.890-11",
            phone="(11) 98888-5678",
            email="maria@email.com",
            birth_date=date(1990, 7, 22),
            insurance_name="Particular",
            address="Av. Paulista, 1000 - São Paulo, SP",
            created_at=date(2024, 2, 15),
        ),
        Patient(
            id="3",
            name="Carlos Eduardo Souza",
            national_id="345.678.901-22",
            phone="(11) 97777-9012",
            email="carlos@email.com",
            birth_date=date(1978, 11, 8),
            insurance_id="AMIL-67890",
            insurance_name="Amil",
            address="Rua Augusta, 500 - São Paulo, SP",
            created_at=date(2024, 3, 1),
        ),
        Patient(
            id="4",
            name="Ana Beatriz Costa",
            national_id="456.789.012-33",
            phone="(11) 96666-3456",
            email="ana.b@email.com",
            birth_date=date(1995, 1, 30),
            insurance_name="Bradesco Saúde",
            address="Rua Oscar Freire, 200 - São Paulo, SP",
            created_at=date(2024, 3, 20),
        ),
        Patient(
            id="5",
            name="Roberto Almeida",
            national_id="567.890.123-44",
            phone="(11) 95555-7890",
            email="roberto@email.com",
            birth_date=date(1982, 6, 12),
            insurance_name="Particular",
            address="Alameda Santos, 800 - São Paulo, SP",
            created_at=date(2024, 4, 5),
        ),
        Patient(
            id="6",
            name="Fernanda Lima",
            national_id="678.901.234-55",
            phone="(11) 94444-1234",
            email="fernanda@email.com",
            birth_date=date(1988, 9, 25),
            insurance_id="SULAMERICA-11111",
            insurance_name="SulAmérica",
            address="Rua Haddock Lobo, 350 - São Paulo, SP",
            created_at=date(2024, 4, 18),
        ),
    ]


def seed_procedure_templates() -> list[ProcedureTemplate]:
    rows = [
        ("1", "Implante Dentário Unitário", "3500", "3-6 meses", "Procedimento cirúrgico para substituição de dente perdido", "Implantodontia"),
        ("2", "Tratamento de Canal", "800", "1-3 sessões", "Remoção da polpa dentária infectada", "Endodontia"),
        ("3", "Aparelho Ortodôntico Fixo", "4000", "18-36 meses", "Correção do alinhamento dentário", "Ortodontia"),
        ("4", "Extração de Siso", "450", "1 sessão", "Remoção cirúrgica do terceiro molar", "Cirurgia"),
        ("5", "Clareamento Dental", "1200", "2-4 sessões", "Procedimento estético para branqueamento", "Estética"),
        ("6", "Profilaxia Completa", "180", "1 sessão", "Limpeza profissional e aplicação de flúor", "Preventivo"),
        ("7", "Restauração em Resina", "250", "1 sessão", "Restauração estética de cavidades", "Dentística"),
        ("8", "Prótese Total", "2800", "4-6 semanas", "Prótese removível completa", "Prótese"),
    ]
    return [
        ProcedureTemplate(
            id=pk,
            name=name,
            base_cost=Decimal(cost),
            estimated_duration=duration,
            description=description,
            category=category,
        )
        for pk, name, cost, duration, description, category in rows
    ]


def seed_procedure_template_stages() -> list[ProcedureTemplateStage]:
    rows = [
        # Implante Dentário
        ("1", "1", "Consulta Inicial e Avaliação", 1, "Avaliação clínica e radiográfica",
         ("Anamnese completa", "Exame clínico", "Solicitação de exames")),
        ("2", "1", "Exames de Imagem", 2, "Tomografia e radiografias",
         ("Tomografia computadorizada", "Radiografia panorâmica", "Análise óssea")),
        ("3", "1", "Planejamento Cirúrgico", 3, "Definição do plano de tratamento",
         ("Guia cirúrgico", "Escolha do implante", "Orçamento aprovado")),
        ("4", "1", "Cirurgia de Implante", 4, "Instalação do implante",
         ("Checklist pré-operatório", "Anestesia", "Instalação", "Sutura")),
        ("5", "1", "Período de Osseointegração", 5, "Aguardar cicatrização (3-6 meses)",
         ("Acompanhamento mensal", "Raio-X de controle")),
        ("6", "1", "Reabertura e Moldagem", 6, "Segunda fase cirúrgica",
         ("Reabertura", "Instalação do cicatrizador", "Moldagem")),
        ("7", "1", "Instalação da Prótese", 7, "Colocação da coroa definitiva",
         ("Prova da prótese", "Ajuste oclusal", "Cimentação/parafusamento")),
        ("8", "1", "Alta e Manutenção", 8, "Orientações finais",
         ("Orientações de higiene", "Agendamento de retorno")),
        # Tratamento de Canal
        ("9", "2", "Diagnóstico e Anestesia", 1, "Confirmação diagnóstica",
         ("Teste de vitalidade", "Raio-X periapical", "Anestesia")),
        ("10", "2", "Abertura e Instrumentação", 2, "Acesso e preparo dos canais",
         ("Isolamento absoluto", "Abertura coronária", "Odontometria", "Instrumentação")),
        ("11", "2", "Obturação", 3, "Selamento dos canais",
         ("Secagem", "Obturação", "Raio-X final", "Restauração provisória")),
        ("12", "2", "Restauração Definitiva", 4, "Restauração do dente",
         ("Remoção provisório", "Restauração definitiva", "Ajuste oclusal")),
        # Ortodontia
        ("13", "3", "Documentação Ortodôntica", 1, "Exames iniciais",
         ("Fotos intra/extra orais", "Radiografias", "Modelos de estudo", "Cefalometria")),
        ("14", "3", "Planejamento", 2, "Elaboração do plano",
         ("Análise cefalométrica", "Plano de tratamento", "Apresentação ao paciente")),
        ("15", "3", "Instalação do Aparelho", 3, "Colagem dos brackets",
         ("Profilaxia", "Colagem", "Inserção do arco inicial")),
        ("16", "3", "Manutenções Mensais", 4, "Ativações periódicas",
         ("Avaliação", "Troca de ligaduras", "Progressão de arcos")),
        ("17", "3", "Remoção e Contenção", 5, "Finalização",
         ("Remoção do aparelho", "Instalação da contenção", "Documentação final")),
    ]
    return [
        ProcedureTemplateStage(
            id=pk,
            template_id=template_id,
            name=name,
            order_index=order_index,
            description=description,
            checklist_items=checklist,
        )
        for pk, template_id, name, order_index, description, checklist in rows
    ]


def seed_stage_templates() -> list[StageTemplate]:
    return [
        StageTemplate(
            id="st1",
            name="Anestesia",
            description="Aplicação de anestesia local",
            default_duration="15 min",
            checklist_items=("Verificar alergias", "Preparar material", "Aplicar anestésico"),
        ),
        StageTemplate(
            id="st2",
            name="Consulta Inicial",
            description="Primeira avaliação do paciente",
            default_duration="30 min",
            checklist_items=("Anamnese", "Exame clínico", "Radiografias iniciais"),
        ),
        StageTemplate(
            id="st3",
            name="Cirurgia",
            description="Procedimento cirúrgico",
            default_duration="1-2h",
            checklist_items=("Checklist pré-operatório", "Equipamentos", "Pós-operatório"),
        ),
        StageTemplate(
            id="st4",
            name="Retorno",
            description="Consulta de acompanhamento",
            default_duration="20 min",
            checklist_items=("Avaliação cicatrização", "Orientações"),
        ),
        StageTemplate(
            id="st5",
            name="Moldagem",
            description="Tomada de moldes",
            default_duration="30 min",
            checklist_items=("Preparar material", "Moldagem", "Enviar laboratório"),
        ),
        StageTemplate(
            id="st6",
            name="Raio-X",
            description="Exames radiográficos",
            default_duration="15 min",
            checklist_items=("Posicionamento", "Tomada radiográfica", "Análise"),
        ),
    ]


def seed_treatments() -> list[Treatment]:
    rows = [
        ("1", "1", "1", date(2024, 9, 15), TreatmentStatus.IN_PROGRESS, "s5", "1", "3800", "Paciente com boa saúde sistêmica"),
        ("2", "2", "2", date(2024, 11, 20), TreatmentStatus.IN_PROGRESS, "s10", "3", "850", None),
        ("3", "3", "3", date(2024, 6, 1), TreatmentStatus.IN_PROGRESS, "s16", "2", "4500", None),
        ("4", "4", "4", date(2024, 12, 1), TreatmentStatus.SCHEDULED, "s1", "1", "500", None),
        ("5", "5", "5", date(2024, 11, 1), TreatmentStatus.COMPLETED, "s4", "2", "1200", None),
        ("6", "6", "6", date(2024, 12, 5), TreatmentStatus.SCHEDULED, "s1", "3", "180", None),
    ]
    return [
        Treatment(
            id=pk,
            patient_id=patient_id,
            template_id=template_id,
            start_date=start_date,
            status=status,
            current_stage_id=current_stage_id,
            dentist_id=dentist_id,
            total_cost=Decimal(total_cost),
            notes=notes,
        )
        for pk, patient_id, template_id, start_date, status, current_stage_id, dentist_id, total_cost, notes in rows
    ]


def seed_treatment_stages() -> list[TreatmentStage]:
    done, active, pending = StageStatus.COMPLETED, StageStatus.IN_PROGRESS, StageStatus.PENDING
    return [
        # Treatment 1: implant
        TreatmentStage(id="s1", treatment_id="1", name="Consulta Inicial e Avaliação", status=done, order_index=1,
                       scheduled_date=date(2024, 9, 15), date_completed=date(2024, 9, 15)),
        TreatmentStage(id="s2", treatment_id="1", name="Exames de Imagem", status=done, order_index=2,
                       scheduled_date=date(2024, 9, 22), date_completed=date(2024, 9, 22),
                       attachments=("tomografia_joao.pdf",)),
        TreatmentStage(id="s3", treatment_id="1", name="Planejamento Cirúrgico", status=done, order_index=3,
                       scheduled_date=date(2024, 9, 30), date_completed=date(2024, 10, 2)),
        TreatmentStage(id="s4", treatment_id="1", name="Cirurgia de Implante", status=done, order_index=4,
                       scheduled_date=date(2024, 10, 15), date_completed=date(2024, 10, 15),
                       notes="Implante Nobel 4.3x11.5mm instalado com sucesso"),
        TreatmentStage(id="s5", treatment_id="1", name="Período de Osseointegração", status=active, order_index=5,
                       scheduled_date=date(2024, 10, 16), notes="Acompanhamento em andamento"),
        TreatmentStage(id="s6", treatment_id="1", name="Reabertura e Moldagem", status=pending, order_index=6,
                       scheduled_date=date(2025, 1, 15)),
        TreatmentStage(id="s7", treatment_id="1", name="Instalação da Prótese", status=pending, order_index=7,
                       scheduled_date=date(2025, 2, 1)),
        TreatmentStage(id="s8", treatment_id="1", name="Alta e Manutenção", status=pending, order_index=8,
                       scheduled_date=date(2025, 2, 15)),
        # Treatment 2: root canal
        TreatmentStage(id="s9", treatment_id="2", name="Diagnóstico e Anestesia", status=done, order_index=1,
                       scheduled_date=date(2024, 11, 20), date_completed=date(2024, 11, 20)),
        TreatmentStage(id="s10", treatment_id="2", name="Abertura e Instrumentação", status=active, order_index=2,
                       scheduled_date=date(2024, 11, 27)),
        TreatmentStage(id="s11", treatment_id="2", name="Obturação", status=pending, order_index=3,
                       scheduled_date=date(2024, 12, 4)),
        TreatmentStage(id="s12", treatment_id="2", name="Restauração Definitiva", status=pending, order_index=4,
                       scheduled_date=date(2024, 12, 11)),
        # Treatment 3: orthodontics
        TreatmentStage(id="s13", treatment_id="3", name="Documentação Ortodôntica", status=done, order_index=1,
                       scheduled_date=date(2024, 6, 1), date_completed=date(2024, 6, 1)),
        TreatmentStage(id="s14", treatment_id="3", name="Planejamento", status=done, order_index=2,
                       scheduled_date=date(2024, 6, 15), date_completed=date(2024, 6, 15)),
        TreatmentStage(id="s15", treatment_id="3", name="Instalação do Aparelho", status=done, order_index=3,
                       scheduled_date=date(2024, 7, 1), date_completed=date(2024, 7, 1)),
        TreatmentStage(id="s16", treatment_id="3", name="Manutenções Mensais", status=active, order_index=4,
                       scheduled_date=date(2024, 8, 1), notes="Manutenção #5 realizada em Nov/2024"),
        TreatmentStage(id="s17", treatment_id="3", name="Remoção e Contenção", status=pending, order_index=5,
                       scheduled_date=date(2026, 1, 1)),
    ]


def seed_financial_records() -> list[FinancialRecord]:
    """Historic records are all settled: status paid, payment_date = date."""
    income, expense = RecordType.INCOME, RecordType.EXPENSE
    patient, clinic = ResponsibleType.PATIENT, ResponsibleType.CLINIC
    rows = [
        ("1", "1", income, "1900", date(2024, 9, 15), "Entrada - Implante", "Implantodontia", patient, "1", "1"),
        ("2", "1", income, "1900", date(2024, 10, 15), "Parcela 2 - Implante", "Implantodontia", patient, "1", "1"),
        ("3", "1", expense, "450", date(2024, 10, 10), "Componente Nobel", "Material", clinic, None, "1"),
        ("4", "2", income, "850", date(2024, 11, 20), "Tratamento de Canal", "Endodontia", patient, "2", "3"),
        ("5", "3", income, "1500", date(2024, 6, 1), "Entrada - Ortodontia", "Ortodontia", patient, "3", "2"),
        ("6", "3", income, "500", date(2024, 7, 1), "Mensalidade Jul", "Ortodontia", patient, "3", "2"),
        ("7", "3", income, "500", date(2024, 8, 1), "Mensalidade Ago", "Ortodontia", patient, "3", "2"),
        ("8", "3", income, "500", date(2024, 9, 1), "Mensalidade Set", "Ortodontia", patient, "3", "2"),
        ("9", "3", income, "500", date(2024, 10, 1), "Mensalidade Out", "Ortodontia", patient, "3", "2"),
        ("10", "3", income, "500", date(2024, 11, 1), "Mensalidade Nov", "Ortodontia", patient, "3", "2"),
        ("11", "5", income, "1200", date(2024, 11, 1), "Clareamento", "Estética", patient, "5", "1"),
        ("12", "6", income, "180", date(2024, 12, 5), "Profilaxia", "Preventivo", patient, "6", "1"),
        ("13", "1", expense, "120", date(2024, 9, 15), "Material cirúrgico", "Material", clinic, None, "1"),
        ("14", "3", expense, "280", date(2024, 7, 1), "Brackets cerâmicos", "Material", clinic, None, "2"),
    ]
    return [
        FinancialRecord(
            id=pk,
            treatment_id=treatment_id,
            type=kind,
            amount=Decimal(amount),
            date=record_date,
            payment_date=record_date,
            description=description,
            category=category,
            status=RecordStatus.PAID,
            responsible_type=responsible,
            patient_id=patient_id,
            created_by=created_by,
        )
        for pk, treatment_id, kind, amount, record_date, description, category, responsible, patient_id, created_by in rows
    ]
