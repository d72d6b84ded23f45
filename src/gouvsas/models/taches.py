"""Modeles des obligations annuelles et des taches persistees.

ObligationTask est le resultat du retro-planning; StoredTask est la meme
obligation une fois persistee (identifiant, societe, statut, horodatage).
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TypeObligation(str, Enum):
    """Types d'obligations du cycle annuel, dans l'ordre de generation."""

    COLLECT_YEAR_INPUTS = "COLLECT_YEAR_INPUTS"
    COLLECT_ACCOUNTS = "COLLECT_ACCOUNTS"
    DRAFT_AGM_PACK = "DRAFT_AGM_PACK"
    SEND_CONVOCATIONS = "SEND_CONVOCATIONS"
    HOLD_AGM = "HOLD_AGM"
    FILE_ACCOUNTS = "FILE_ACCOUNTS"
    ARCHIVE = "ARCHIVE"


class RoleResponsable(str, Enum):
    """Role responsable d'une obligation."""

    PRESIDENT = "PRESIDENT"
    ACCOUNTANT = "ACCOUNTANT"


class TaskStatus(str, Enum):
    """Statut d'une tache dans le flux de travail."""

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"
    BLOCKED = "BLOCKED"
    LATE = "LATE"


class ObligationTask(BaseModel):
    """Une obligation datee du cycle annuel."""

    type: TypeObligation
    title: str
    due_date: datetime.date
    owner_role: RoleResponsable
    description: str
    cycle_year: int


class StoredTask(ObligationTask):
    """Obligation persistee, possedee et modifiee par le flux de travail."""

    id: str
    company_id: str
    status: TaskStatus = TaskStatus.TODO
    created_at: datetime.datetime
    updated_at: datetime.datetime

    @classmethod
    def depuis_obligation(
        cls,
        obligation: ObligationTask,
        company_id: str,
        task_id: str,
        maintenant: datetime.datetime,
    ) -> StoredTask:
        """Construit une tache TODO a partir d'une obligation calculee."""
        return cls(
            **obligation.model_dump(),
            id=task_id,
            company_id=company_id,
            status=TaskStatus.TODO,
            created_at=maintenant,
            updated_at=maintenant,
        )


class GovernanceParameters(BaseModel):
    """Parametres de gouvernance utilises par le retro-planning.

    Les valeurs par defaut sont les minimums statutaires d'une SAS:
    15 jours de preavis de convocation et 180 jours (6 mois) pour
    l'approbation des comptes.
    """

    notice_period_days: int = 15
    approval_deadline_days: int = 180


class GovernanceCycle(BaseModel):
    """Un cycle annuel d'obligations pour une societe.

    Construit a chaque demande de planification, jamais persiste.
    """

    company_id: str = ""
    fiscal_year_end_month: int = Field(ge=1, le=12)
    fiscal_year_end_day: int = Field(ge=1, le=31)
    cycle_year: int
    notice_period_days: int = 15
    approval_deadline_days: int = 180

    @property
    def parametres(self) -> GovernanceParameters:
        return GovernanceParameters(
            notice_period_days=self.notice_period_days,
            approval_deadline_days=self.approval_deadline_days,
        )
