"""Registre des taches du cycle annuel avec persistance YAML.

La regeneration d'un calendrier est un remplacement complet: les taches
existantes du couple (societe, annee de cycle) sont supprimees puis les
nouvelles inserees, sous un meme verrou et en une seule ecriture.
"""

from __future__ import annotations

import datetime
import logging
import uuid
from pathlib import Path
from typing import Protocol

from gouvsas.models.taches import ObligationTask, StoredTask, TaskStatus
from gouvsas.registre._yaml import charger_yaml, sauvegarder_yaml, verrou_fichier

logger = logging.getLogger(__name__)


class TacheIntrouvable(LookupError):
    """Aucune tache avec cet identifiant."""


class DepotTaches(Protocol):
    """Depot de taches attendu par la couche de services."""

    def replace_tasks_for_cycle(
        self, company_id: str, cycle_year: int, tasks: list[ObligationTask]
    ) -> list[StoredTask]: ...

    def lister(
        self, company_id: str | None = None, cycle_year: int | None = None
    ) -> list[StoredTask]: ...


class RegistreTaches:
    """Registre de taches persistant en YAML."""

    def __init__(self, chemin: Path | None = None) -> None:
        self.chemin = chemin or Path("data/taches.yaml")
        self._verrou = verrou_fichier(self.chemin)
        self._taches: list[StoredTask] = []
        self._charger()

    def _charger(self) -> None:
        """Charge les taches depuis le fichier YAML."""
        donnees = charger_yaml(self.chemin)
        if donnees and isinstance(donnees, list):
            self._taches = [StoredTask.model_validate(d) for d in donnees]
        else:
            self._taches = []

    def _sauvegarder(self) -> None:
        sauvegarder_yaml(self.chemin, [t.model_dump(mode="json") for t in self._taches])

    def replace_tasks_for_cycle(
        self,
        company_id: str,
        cycle_year: int,
        tasks: list[ObligationTask],
    ) -> list[StoredTask]:
        """Remplace toutes les taches du couple (societe, annee) par `tasks`.

        Returns:
            Les taches inserees, statut TODO, dans l'ordre recu.
        """
        maintenant = datetime.datetime.now(datetime.timezone.utc)
        nouvelles = [
            StoredTask.depuis_obligation(t, company_id, uuid.uuid4().hex, maintenant)
            for t in tasks
        ]
        with self._verrou:
            self._charger()
            avant = len(self._taches)
            self._taches = [
                t
                for t in self._taches
                if not (t.company_id == company_id and t.cycle_year == cycle_year)
            ]
            supprimees = avant - len(self._taches)
            self._taches.extend(nouvelles)
            self._sauvegarder()
        logger.info(
            "Cycle %s/%d: %d tache(s) supprimee(s), %d inseree(s)",
            company_id, cycle_year, supprimees, len(nouvelles),
        )
        return nouvelles

    def lister(
        self,
        company_id: str | None = None,
        cycle_year: int | None = None,
    ) -> list[StoredTask]:
        """Liste les taches triees par echeance, optionnellement filtrees."""
        with self._verrou:
            self._charger()
            taches = [
                t
                for t in self._taches
                if (company_id is None or t.company_id == company_id)
                and (cycle_year is None or t.cycle_year == cycle_year)
            ]
        return sorted(taches, key=lambda t: t.due_date)

    def obtenir(self, task_id: str) -> StoredTask:
        """Retourne une tache. Leve TacheIntrouvable si absente."""
        with self._verrou:
            self._charger()
            for t in self._taches:
                if t.id == task_id:
                    return t
        raise TacheIntrouvable(f"Tache {task_id} introuvable")

    def mettre_a_jour_statut(self, task_id: str, statut: TaskStatus) -> StoredTask:
        """Met a jour le statut d'une tache. Leve TacheIntrouvable si absente."""
        with self._verrou:
            self._charger()
            for i, t in enumerate(self._taches):
                if t.id == task_id:
                    donnees = t.model_dump()
                    donnees["status"] = statut
                    donnees["updated_at"] = datetime.datetime.now(datetime.timezone.utc)
                    self._taches[i] = StoredTask.model_validate(donnees)
                    self._sauvegarder()
                    return self._taches[i]
        raise TacheIntrouvable(f"Tache {task_id} introuvable")
