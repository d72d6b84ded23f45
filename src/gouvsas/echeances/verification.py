"""Verification de l'enveloppe des parametres de retro-planning.

Les formules du retro-planning ne garantissent pas un ordre chronologique
strict: avec un delai d'approbation court ou un long preavis, l'envoi des
convocations peut preceder la preparation du dossier d'AG ou la collecte
des comptes. Ces verifications signalent ces cas sans jamais modifier les
dates calculees.
"""

from __future__ import annotations

import datetime
from enum import Enum

from pydantic import BaseModel

from gouvsas.models.taches import GovernanceParameters, ObligationTask, TypeObligation


class Severite(str, Enum):
    """Niveau de severite d'une verification."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class VerificationResult(BaseModel):
    """Resultat d'une verification d'enveloppe."""
    nom: str
    passe: bool
    message: str
    severite: Severite


def _dates(obligations: list[ObligationTask]) -> dict[TypeObligation, datetime.date]:
    return {o.type: o.due_date for o in obligations}


def _verifier_precede(
    dates: dict[TypeObligation, datetime.date],
    avant: TypeObligation,
    apres: TypeObligation,
    nom: str,
) -> VerificationResult:
    """Verifie que `avant` n'est pas posterieure a `apres`."""
    if dates[avant] <= dates[apres]:
        return VerificationResult(
            nom=nom,
            passe=True,
            message=f"{avant.value} ({dates[avant]}) precede {apres.value} ({dates[apres]}).",
            severite=Severite.INFO,
        )
    return VerificationResult(
        nom=nom,
        passe=False,
        message=(
            f"{apres.value} ({dates[apres]}) tombe avant {avant.value} "
            f"({dates[avant]}). Parametres hors de l'enveloppe prevue."
        ),
        severite=Severite.WARNING,
    )


def _verifier_preavis(
    dates: dict[TypeObligation, datetime.date],
    parametres: GovernanceParameters,
) -> VerificationResult:
    """Verifie l'ecart entre l'envoi des convocations et l'AG.

    Les formules laissent en general quelques jours de moins que le preavis
    (12 jours pour 15 / 180): l'ecart est signale en INFO, pas en WARNING.
    """
    ecart = (dates[TypeObligation.HOLD_AGM] - dates[TypeObligation.SEND_CONVOCATIONS]).days
    if ecart >= parametres.notice_period_days:
        return VerificationResult(
            nom="Preavis de convocation",
            passe=True,
            message=f"{ecart} jours entre convocation et AG (minimum {parametres.notice_period_days}).",
            severite=Severite.INFO,
        )
    return VerificationResult(
        nom="Preavis de convocation",
        passe=False,
        message=(
            f"Seulement {ecart} jours entre convocation et AG "
            f"(minimum {parametres.notice_period_days})."
        ),
        severite=Severite.INFO,
    )


def verifier_enveloppe(
    obligations: list[ObligationTask],
    parametres: GovernanceParameters | None = None,
) -> list[VerificationResult]:
    """Execute toutes les verifications d'enveloppe sur un calendrier calcule.

    Args:
        obligations: Les sept obligations retournees par planifier_obligations().
        parametres: Parametres utilises pour le calcul (defaut: 15 / 180).

    Returns:
        Liste de VerificationResult, une par verification.
    """
    if parametres is None:
        parametres = GovernanceParameters()
    dates = _dates(obligations)
    return [
        _verifier_precede(
            dates,
            TypeObligation.COLLECT_ACCOUNTS,
            TypeObligation.SEND_CONVOCATIONS,
            "Comptes avant convocations",
        ),
        _verifier_precede(
            dates,
            TypeObligation.DRAFT_AGM_PACK,
            TypeObligation.SEND_CONVOCATIONS,
            "Dossier d'AG avant convocations",
        ),
        _verifier_precede(
            dates,
            TypeObligation.SEND_CONVOCATIONS,
            TypeObligation.HOLD_AGM,
            "Convocations avant AG",
        ),
        _verifier_preavis(dates, parametres),
    ]


_ORDRE_SEVERITE = [Severite.INFO, Severite.WARNING, Severite.ERROR]


def anomalies(
    resultats: list[VerificationResult],
    severite_min: Severite = Severite.WARNING,
) -> list[VerificationResult]:
    """Retourne les verifications echouees d'au moins `severite_min`."""
    seuil = _ORDRE_SEVERITE.index(severite_min)
    return [
        r for r in resultats
        if not r.passe and _ORDRE_SEVERITE.index(r.severite) >= seuil
    ]
