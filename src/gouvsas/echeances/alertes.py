"""Alertes d'echeance sur les taches persistees.

Detecte les taches en retard ou dues dans les 7 ou 14 prochains jours et
construit les evenements correspondants. L'envoi (webhook, Slack,
courriel) est la responsabilite de l'appelant.
"""

from __future__ import annotations

import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel

from gouvsas.models.taches import StoredTask, TaskStatus

# Jours avant echeance auxquels un rappel peut etre programme.
REMINDER_INTERVALS: tuple[int, ...] = (30, 14, 7, 1)


class EvenementEcheance(str, Enum):
    """Evenements emis vers les integrations externes."""

    TIMELINE_GENERATED = "timeline_generated"
    TASK_DUE_14_DAYS = "task_due_14_days"
    TASK_DUE_7_DAYS = "task_due_7_days"
    TASK_OVERDUE = "task_overdue"


class AlerteTache(BaseModel):
    """Alerte active pour une tache approchante ou en retard."""

    evenement: EvenementEcheance
    tache: StoredTask
    jours_restants: int
    urgence: Literal["critique", "urgent", "normal"]


def statut_effectif(
    tache: StoredTask,
    aujourd_hui: datetime.date | None = None,
) -> TaskStatus:
    """Retourne LATE pour une tache non terminee dont l'echeance est passee."""
    if aujourd_hui is None:
        aujourd_hui = datetime.date.today()
    if tache.status != TaskStatus.DONE and tache.due_date < aujourd_hui:
        return TaskStatus.LATE
    return tache.status


def verifier_taches_dues(
    taches: list[StoredTask],
    aujourd_hui: datetime.date | None = None,
) -> list[AlerteTache]:
    """Retourne les alertes pour les taches en retard ou dues sous 14 jours.

    Les taches DONE sont ignorees.

    Args:
        taches: Taches persistees, toutes societes confondues.
        aujourd_hui: Date de reference (defaut: aujourd'hui).

    Returns:
        Alertes triees par jours_restants (retards d'abord).
    """
    if aujourd_hui is None:
        aujourd_hui = datetime.date.today()

    alertes: list[AlerteTache] = []
    for tache in taches:
        if tache.status == TaskStatus.DONE:
            continue

        jours = (tache.due_date - aujourd_hui).days
        if jours < 0:
            evenement = EvenementEcheance.TASK_OVERDUE
            urgence: Literal["critique", "urgent", "normal"] = "critique"
        elif jours <= 7:
            evenement = EvenementEcheance.TASK_DUE_7_DAYS
            urgence = "urgent"
        elif jours <= 14:
            evenement = EvenementEcheance.TASK_DUE_14_DAYS
            urgence = "normal"
        else:
            continue

        alertes.append(
            AlerteTache(
                evenement=evenement,
                tache=tache,
                jours_restants=jours,
                urgence=urgence,
            )
        )

    return sorted(alertes, key=lambda a: a.jours_restants)


def rappels_du_jour(
    taches: list[StoredTask],
    aujourd_hui: datetime.date | None = None,
    intervalles: tuple[int, ...] = REMINDER_INTERVALS,
) -> list[tuple[StoredTask, int]]:
    """Retourne les (tache, jours) dont l'echeance tombe exactement a un intervalle."""
    if aujourd_hui is None:
        aujourd_hui = datetime.date.today()
    resultat = []
    for tache in taches:
        if tache.status == TaskStatus.DONE:
            continue
        jours = (tache.due_date - aujourd_hui).days
        if jours in intervalles:
            resultat.append((tache, jours))
    return resultat


def construire_payload(
    evenement: EvenementEcheance,
    company_id: str,
    company_name: str | None = None,
    tache: StoredTask | None = None,
    cycle_year: int | None = None,
    maintenant: datetime.datetime | None = None,
) -> dict:
    """Construit le payload JSON d'un evenement pour un webhook (Zapier/Make)."""
    if maintenant is None:
        maintenant = datetime.datetime.now(datetime.timezone.utc)
    payload: dict = {
        "event": evenement.value,
        "company_id": company_id,
        "company_name": company_name or "Unknown",
        "timestamp": maintenant.isoformat(),
    }
    if tache is not None:
        payload["task_id"] = tache.id
        payload["task_title"] = tache.title
        payload["task_due_date"] = tache.due_date.isoformat()
        payload["cycle_year"] = tache.cycle_year
    elif cycle_year is not None:
        payload["cycle_year"] = cycle_year
    return payload


def formater_rappels_cli(alertes: list[AlerteTache]) -> str | None:
    """Formate les alertes pour le CLI avec le markup Rich.

    Returns:
        Chaine formatee Rich ou None si aucune alerte.
    """
    if not alertes:
        return None

    couleur_map = {
        "critique": "red",
        "urgent": "yellow",
        "normal": "blue",
    }

    lignes: list[str] = []
    for alerte in alertes:
        couleur = couleur_map.get(alerte.urgence, "blue")
        tache = alerte.tache
        if alerte.evenement == EvenementEcheance.TASK_OVERDUE:
            delai = f"en retard de {-alerte.jours_restants} jours"
        else:
            delai = f"dans {alerte.jours_restants} jours"
        icone = "[!]" if alerte.urgence in ("critique", "urgent") else "[i]"
        lignes.append(
            f"[{couleur}]{icone} {tache.title} ({tache.owner_role.value}) "
            f"{delai} ({tache.due_date})[/{couleur}]"
        )

    return "\n".join(lignes)
