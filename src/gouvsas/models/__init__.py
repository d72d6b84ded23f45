"""Modeles de donnees GouvSAS."""

from gouvsas.models.societe import Company, GovernanceProfile
from gouvsas.models.taches import (
    GovernanceCycle,
    GovernanceParameters,
    ObligationTask,
    RoleResponsable,
    StoredTask,
    TaskStatus,
    TypeObligation,
)

__all__ = [
    "Company",
    "GovernanceCycle",
    "GovernanceParameters",
    "GovernanceProfile",
    "ObligationTask",
    "RoleResponsable",
    "StoredTask",
    "TaskStatus",
    "TypeObligation",
]
