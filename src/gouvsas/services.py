"""Couche de services partagee entre l'API HTTP, le serveur MCP et le CLI.

Valide les requetes, charge la societe et son profil de gouvernance,
appelle le retro-planning et persiste le resultat via le registre de
taches. Le retro-planning lui-meme reste une fonction pure.
"""

from __future__ import annotations

import datetime
import logging

from pydantic import BaseModel, ConfigDict, Field, StrictInt, ValidationError

from gouvsas.echeances.alertes import (
    EvenementEcheance,
    construire_payload,
    statut_effectif,
    verifier_taches_dues,
)
from gouvsas.echeances.retroplanning import planifier_obligations
from gouvsas.echeances.verification import Severite, anomalies, verifier_enveloppe
from gouvsas.models.taches import GovernanceParameters, StoredTask, TaskStatus
from gouvsas.registre.societes import RegistreSocietes, SocieteIntrouvable
from gouvsas.registre.taches import DepotTaches

logger = logging.getLogger(__name__)

ANNEE_MIN = 2000
ANNEE_MAX = 2100


class ErreurValidation(ValueError):
    """Requete mal formee ou hors limites."""

    def __init__(self, erreurs: list[str]) -> None:
        self.erreurs = erreurs
        super().__init__(", ".join(erreurs))


class RequeteCalendrier(BaseModel):
    """Corps d'une requete de generation de calendrier."""

    model_config = ConfigDict(populate_by_name=True)

    company_id: str = Field(alias="companyId", min_length=1)
    cycle_year: StrictInt = Field(alias="cycleYear", ge=ANNEE_MIN, le=ANNEE_MAX)


class RequeteStatut(BaseModel):
    """Corps d'une requete de changement de statut."""

    status: TaskStatus


def _message_erreur(champ: str, err: dict) -> str:
    """Traduit une erreur pydantic dans le libelle expose par l'API."""
    type_ = err["type"]
    ctx = err.get("ctx") or {}
    if type_ == "missing" or err.get("input") in (None, ""):
        return f"{champ} is required"
    if type_ == "string_type":
        return f"{champ} must be a string"
    if type_ == "string_too_short":
        return f"{champ} must be at least {ctx.get('min_length')} characters"
    if type_.startswith("int_"):
        return f"{champ} must be a number"
    if type_ == "greater_than_equal":
        return f"{champ} must be at least {ctx.get('ge')}"
    if type_ == "less_than_equal":
        return f"{champ} must be at most {ctx.get('le')}"
    if type_ == "enum":
        return f"{champ} must be one of {ctx.get('expected')}"
    return f"{champ}: {err['msg']}"


def _formater_erreurs(exc: ValidationError) -> list[str]:
    return [
        _message_erreur(".".join(str(p) for p in err["loc"]) or "body", err)
        for err in exc.errors()
    ]


def valider_requete_calendrier(corps: object) -> RequeteCalendrier:
    """Valide le corps d'une requete de calendrier.

    Raises:
        ErreurValidation: avec la liste de toutes les regles en echec.
    """
    if not isinstance(corps, dict):
        raise ErreurValidation(["Invalid request body"])
    try:
        return RequeteCalendrier.model_validate(corps)
    except ValidationError as e:
        raise ErreurValidation(_formater_erreurs(e)) from e


def valider_requete_statut(corps: object) -> TaskStatus:
    """Valide le corps d'une requete de changement de statut."""
    if not isinstance(corps, dict):
        raise ErreurValidation(["Invalid request body"])
    try:
        return RequeteStatut.model_validate(corps).status
    except ValidationError as e:
        raise ErreurValidation(_formater_erreurs(e)) from e


def _serialiser(tache: StoredTask, aujourd_hui: datetime.date | None = None) -> dict:
    donnees = tache.model_dump(mode="json")
    if aujourd_hui is not None:
        donnees["status"] = statut_effectif(tache, aujourd_hui).value
    return donnees


def generer_calendrier(
    requete: RequeteCalendrier,
    societes: RegistreSocietes,
    taches: DepotTaches,
) -> dict:
    """Genere et persiste le calendrier annuel d'une societe.

    Les taches existantes du meme cycle sont remplacees.

    Raises:
        SocieteIntrouvable: si la societe n'existe pas.
        InvalidInput: si la fin d'exercice stockee est illisible.
    """
    logger.info(
        "Generation du calendrier: societe=%s annee=%d",
        requete.company_id, requete.cycle_year,
    )
    societe = societes.obtenir(requete.company_id)
    profil = societes.profil(requete.company_id)
    parametres = profil.parametres() if profil else GovernanceParameters()

    obligations = planifier_obligations(
        societe.fiscal_year_end, requete.cycle_year, parametres
    )
    verifications = verifier_enveloppe(obligations, parametres)
    for resultat in anomalies(verifications, Severite.INFO):
        niveau = logging.INFO if resultat.severite == Severite.INFO else logging.WARNING
        logger.log(niveau, "%s: %s", resultat.nom, resultat.message)
    avertissements = anomalies(verifications)

    creees = taches.replace_tasks_for_cycle(
        requete.company_id, requete.cycle_year, obligations
    )
    logger.info("%d taches creees", len(creees))

    return {
        "success": True,
        "tasksCreated": len(creees),
        "tasks": [_serialiser(t) for t in creees],
        "warnings": [r.message for r in avertissements],
        "webhook": construire_payload(
            EvenementEcheance.TIMELINE_GENERATED,
            requete.company_id,
            societe.name,
            cycle_year=requete.cycle_year,
        ),
    }


def lister_taches(
    taches: DepotTaches,
    company_id: str,
    cycle_year: int | None = None,
    aujourd_hui: datetime.date | None = None,
) -> list[dict]:
    """Liste les taches d'une societe par echeance, avec statut effectif (LATE)."""
    if aujourd_hui is None:
        aujourd_hui = datetime.date.today()
    return [_serialiser(t, aujourd_hui) for t in taches.lister(company_id, cycle_year)]


def verifier_echeances(
    taches: DepotTaches,
    societes: RegistreSocietes,
    company_id: str | None = None,
    aujourd_hui: datetime.date | None = None,
) -> dict:
    """Construit les evenements d'echeance (14 jours, 7 jours, retard).

    Ne fait aucun envoi: les payloads sont retournes a l'appelant.
    """
    alertes = verifier_taches_dues(taches.lister(company_id), aujourd_hui)
    webhooks = []
    for alerte in alertes:
        try:
            nom = societes.obtenir(alerte.tache.company_id).name
        except SocieteIntrouvable:
            logger.warning("Tache %s: societe %s inconnue", alerte.tache.id, alerte.tache.company_id)
            nom = None
        webhooks.append(
            construire_payload(alerte.evenement, alerte.tache.company_id, nom, alerte.tache)
        )
    return {"success": True, "webhooksTriggered": len(webhooks), "webhooks": webhooks}
