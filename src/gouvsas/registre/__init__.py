"""Registres YAML: societes, profils de gouvernance et taches."""

from gouvsas.registre.societes import RegistreSocietes, SocieteIntrouvable
from gouvsas.registre.taches import DepotTaches, RegistreTaches, TacheIntrouvable

__all__ = [
    "DepotTaches",
    "RegistreSocietes",
    "RegistreTaches",
    "SocieteIntrouvable",
    "TacheIntrouvable",
]
