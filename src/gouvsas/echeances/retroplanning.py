"""Retro-planning des obligations annuelles de gouvernance d'une SAS.

Calcule les sept obligations du cycle annuel (collecte, comptes, dossier
d'AG, convocations, AG, depot, archivage) a partir de la date de fin
d'exercice et de deux delais: preavis de convocation et delai
d'approbation des comptes.

Ajout de mois: on utilise relativedelta. Quand le jour d'ancrage n'existe
pas dans le mois cible, la date retombe sur le dernier jour de ce mois
(31 dec + 4 mois = 30 avril). Une fin d'exercice au 29 fevrier ancree
dans une annee non bissextile retombe sur le 28 fevrier.

Fonction pure: aucune lecture ni ecriture de registre.
"""

from __future__ import annotations

import datetime
from typing import Union

from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

from gouvsas.models.taches import (
    GovernanceCycle,
    GovernanceParameters,
    ObligationTask,
    RoleResponsable,
    TypeObligation,
)


class InvalidInput(ValueError):
    """Fin d'exercice impossible a interpreter."""


FinExercice = Union[datetime.date, datetime.datetime, str]


# ---------------------------------------------------------------------------
# Table des obligations
# ---------------------------------------------------------------------------

# (titre, responsable, description) par type, dans l'ordre de generation.
OBLIGATIONS: dict[TypeObligation, tuple[str, RoleResponsable, str]] = {
    TypeObligation.COLLECT_YEAR_INPUTS: (
        "Provide year context and inputs",
        RoleResponsable.PRESIDENT,
        "Answer questions about capital changes, dividends, notable events",
    ),
    TypeObligation.COLLECT_ACCOUNTS: (
        "Collect annual accounts from accountant",
        RoleResponsable.ACCOUNTANT,
        "Obtain balance sheet, P&L, and annexes",
    ),
    TypeObligation.DRAFT_AGM_PACK: (
        "Draft AGM documentation pack",
        RoleResponsable.PRESIDENT,
        "Prepare convocation, draft resolutions, PV template",
    ),
    TypeObligation.SEND_CONVOCATIONS: (
        "Send AGM convocations to shareholders",
        RoleResponsable.PRESIDENT,
        "Must be sent at least {preavis} days before AGM",
    ),
    TypeObligation.HOLD_AGM: (
        "Hold Annual General Meeting",
        RoleResponsable.PRESIDENT,
        "Approve accounts and adopt resolutions",
    ),
    TypeObligation.FILE_ACCOUNTS: (
        "File accounts with the Greffe",
        RoleResponsable.PRESIDENT,
        "Submit approved accounts to the commercial registry",
    ),
    TypeObligation.ARCHIVE: (
        "Archive governance documents",
        RoleResponsable.PRESIDENT,
        "Store signed PV, receipts, and filed documents",
    ),
}


# ---------------------------------------------------------------------------
# Utilitaires
# ---------------------------------------------------------------------------


def extraire_fin_exercice(fin_exercice: FinExercice) -> tuple[int, int]:
    """Retourne (mois, jour) de la fin d'exercice.

    Accepte une date, un datetime ou une chaine ISO 8601
    ("2024-12-31", "2024-12-31T00:00:00Z"). L'annee est ignoree.

    Raises:
        InvalidInput: si la valeur ne peut pas etre interpretee.
    """
    if isinstance(fin_exercice, datetime.date):  # datetime inclus
        return fin_exercice.month, fin_exercice.day
    if not isinstance(fin_exercice, str) or not fin_exercice.strip():
        raise InvalidInput(f"Fin d'exercice invalide: {fin_exercice!r}")
    try:
        d = date_parser.isoparse(fin_exercice.strip())
    except (ValueError, OverflowError) as e:
        raise InvalidInput(f"Fin d'exercice invalide: {fin_exercice!r}") from e
    return d.month, d.day


def ancrer_fin_exercice(mois: int, jour: int, annee_cycle: int) -> datetime.date:
    """Fin d'exercice dans l'annee du cycle (jour borne a la fin du mois)."""
    try:
        return datetime.date(annee_cycle, 1, 1) + relativedelta(month=mois, day=jour)
    except (ValueError, OverflowError) as e:
        raise InvalidInput(
            f"Annee de cycle non representable: {annee_cycle}"
        ) from e


def _obligation(
    type_: TypeObligation,
    date_limite: datetime.date,
    annee_cycle: int,
    parametres: GovernanceParameters,
) -> ObligationTask:
    titre, role, description = OBLIGATIONS[type_]
    return ObligationTask(
        type=type_,
        title=titre,
        due_date=date_limite,
        owner_role=role,
        description=description.format(preavis=parametres.notice_period_days),
        cycle_year=annee_cycle,
    )


# ---------------------------------------------------------------------------
# Planification
# ---------------------------------------------------------------------------


def planifier_obligations(
    fin_exercice: FinExercice,
    annee_cycle: int,
    parametres: GovernanceParameters | None = None,
) -> list[ObligationTask]:
    """Calcule les sept obligations du cycle annuel.

    Args:
        fin_exercice: Date de fin d'exercice de la societe (seuls le mois
            et le jour sont utilises).
        annee_cycle: Annee civile du cycle planifie.
        parametres: Preavis et delai d'approbation (defaut: 15 et 180 jours).

    Returns:
        Sept ObligationTask, toujours dans l'ordre de TypeObligation.

    Raises:
        InvalidInput: si la fin d'exercice ne peut pas etre interpretee.
    """
    if parametres is None:
        parametres = GovernanceParameters()
    mois, jour = extraire_fin_exercice(fin_exercice)
    fye = ancrer_fin_exercice(mois, jour, annee_cycle)

    preavis = parametres.notice_period_days
    approbation = parametres.approval_deadline_days

    try:
        dates = {
            TypeObligation.COLLECT_YEAR_INPUTS: fye + relativedelta(months=4),
            TypeObligation.COLLECT_ACCOUNTS: (
                fye + relativedelta(months=4) + datetime.timedelta(days=15)
            ),
            TypeObligation.DRAFT_AGM_PACK: fye + relativedelta(months=5),
            # Approximation mois/jours volontaire: floor(delai / 30) mois.
            TypeObligation.SEND_CONVOCATIONS: (
                fye
                + relativedelta(months=approbation // 30)
                - datetime.timedelta(days=preavis + 5)
            ),
            TypeObligation.HOLD_AGM: fye + datetime.timedelta(days=approbation - 7),
        }
        dates[TypeObligation.FILE_ACCOUNTS] = (
            dates[TypeObligation.HOLD_AGM] + relativedelta(months=1)
        )
        dates[TypeObligation.ARCHIVE] = (
            dates[TypeObligation.FILE_ACCOUNTS] + datetime.timedelta(days=14)
        )
    except (ValueError, OverflowError) as e:
        raise InvalidInput(f"Dates hors limites pour le cycle {annee_cycle}") from e

    return [
        _obligation(type_, dates[type_], annee_cycle, parametres)
        for type_ in TypeObligation
    ]


def planifier_cycle(cycle: GovernanceCycle) -> list[ObligationTask]:
    """Calcule les obligations d'un GovernanceCycle deja construit."""
    fye = ancrer_fin_exercice(
        cycle.fiscal_year_end_month, cycle.fiscal_year_end_day, cycle.cycle_year
    )
    return planifier_obligations(fye, cycle.cycle_year, cycle.parametres)


def construire_cycle(
    company_id: str,
    fin_exercice: FinExercice,
    annee_cycle: int,
    parametres: GovernanceParameters | None = None,
) -> GovernanceCycle:
    """Construit un GovernanceCycle a partir d'une fin d'exercice stockee."""
    if parametres is None:
        parametres = GovernanceParameters()
    mois, jour = extraire_fin_exercice(fin_exercice)
    return GovernanceCycle(
        company_id=company_id,
        fiscal_year_end_month=mois,
        fiscal_year_end_day=jour,
        cycle_year=annee_cycle,
        notice_period_days=parametres.notice_period_days,
        approval_deadline_days=parametres.approval_deadline_days,
    )
