"""Registre des societes et de leurs profils de gouvernance (YAML)."""

from __future__ import annotations

from pathlib import Path

from gouvsas.models.societe import Company, GovernanceProfile
from gouvsas.registre._yaml import charger_yaml, sauvegarder_yaml, verrou_fichier


class SocieteIntrouvable(LookupError):
    """Aucune societe avec cet identifiant."""


class RegistreSocietes:
    """Registre des societes persistant en YAML."""

    def __init__(self, chemin: Path | None = None) -> None:
        self.chemin = chemin or Path("data/societes.yaml")
        self._verrou = verrou_fichier(self.chemin)
        self._societes: list[Company] = []
        self._profils: list[GovernanceProfile] = []
        self._charger()

    def _charger(self) -> None:
        """Charge societes et profils depuis le fichier YAML."""
        donnees = charger_yaml(self.chemin)
        if donnees and isinstance(donnees, dict):
            self._societes = [Company.model_validate(d) for d in donnees.get("societes") or []]
            self._profils = [
                GovernanceProfile.model_validate(d) for d in donnees.get("profils") or []
            ]
        else:
            self._societes = []
            self._profils = []

    def _sauvegarder(self) -> None:
        sauvegarder_yaml(
            self.chemin,
            {
                "societes": [s.model_dump(mode="json") for s in self._societes],
                "profils": [p.model_dump(mode="json") for p in self._profils],
            },
        )

    def ajouter(self, societe: Company) -> None:
        """Ajoute une societe. Leve ValueError si l'identifiant existe deja."""
        with self._verrou:
            self._charger()
            if any(s.id == societe.id for s in self._societes):
                raise ValueError(f"Societe {societe.id} existe deja dans le registre")
            self._societes.append(societe)
            self._sauvegarder()

    def obtenir(self, company_id: str) -> Company:
        """Retourne une societe. Leve SocieteIntrouvable si absente."""
        with self._verrou:
            self._charger()
            for s in self._societes:
                if s.id == company_id:
                    return s
        raise SocieteIntrouvable(f"Societe {company_id} introuvable")

    def lister(self) -> list[Company]:
        with self._verrou:
            self._charger()
            return list(self._societes)

    def profil(self, company_id: str) -> GovernanceProfile | None:
        """Retourne le profil de gouvernance, ou None s'il n'a pas ete renseigne."""
        with self._verrou:
            self._charger()
            for p in self._profils:
                if p.company_id == company_id:
                    return p
        return None

    def definir_profil(self, profil: GovernanceProfile) -> None:
        """Cree ou remplace le profil de gouvernance d'une societe existante."""
        with self._verrou:
            self.obtenir(profil.company_id)
            self._profils = [p for p in self._profils if p.company_id != profil.company_id]
            self._profils.append(profil)
            self._sauvegarder()
