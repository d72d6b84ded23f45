"""Modeles de la societe et de son profil de gouvernance."""

from __future__ import annotations

import datetime
from typing import Optional

from pydantic import BaseModel, Field

from gouvsas.models.taches import GovernanceParameters


class Company(BaseModel):
    """Societe suivie (une SAS par defaut)."""

    id: str
    name: str
    fiscal_year_end: datetime.date
    legal_form: str = "SAS"
    jurisdiction: str = "FR"
    president_name: str = ""
    president_email: str = ""
    siren: Optional[str] = None


class GovernanceProfile(BaseModel):
    """Profil de gouvernance extrait des statuts.

    Les delais absents (None) retombent sur les valeurs par defaut de
    GovernanceParameters.
    """

    company_id: str
    notice_period_days: Optional[int] = Field(default=None, ge=0)
    approval_deadline_days: Optional[int] = Field(default=None, ge=0)
    quorum_rules_summary: Optional[str] = None
    majority_rules_summary: Optional[str] = None
    who_can_convene: Optional[str] = None

    def parametres(self) -> GovernanceParameters:
        """Retourne les parametres de planification, defauts appliques."""
        defauts = GovernanceParameters()
        return GovernanceParameters(
            notice_period_days=(
                self.notice_period_days
                if self.notice_period_days is not None
                else defauts.notice_period_days
            ),
            approval_deadline_days=(
                self.approval_deadline_days
                if self.approval_deadline_days is not None
                else defauts.approval_deadline_days
            ),
        )
