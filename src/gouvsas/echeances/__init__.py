"""Module echeances: retro-planning, verification d'enveloppe et alertes.

Fournit le calcul des sept obligations annuelles d'une SAS a partir de la
fin d'exercice, la detection des combinaisons de parametres hors
enveloppe et les alertes sur les taches dues ou en retard.
"""

from gouvsas.echeances.alertes import (
    REMINDER_INTERVALS,
    AlerteTache,
    EvenementEcheance,
    construire_payload,
    formater_rappels_cli,
    rappels_du_jour,
    statut_effectif,
    verifier_taches_dues,
)
from gouvsas.echeances.retroplanning import (
    InvalidInput,
    construire_cycle,
    planifier_cycle,
    planifier_obligations,
)
from gouvsas.echeances.verification import (
    Severite,
    VerificationResult,
    anomalies,
    verifier_enveloppe,
)

__all__ = [
    "REMINDER_INTERVALS",
    "AlerteTache",
    "EvenementEcheance",
    "InvalidInput",
    "Severite",
    "VerificationResult",
    "anomalies",
    "construire_cycle",
    "construire_payload",
    "formater_rappels_cli",
    "planifier_cycle",
    "planifier_obligations",
    "rappels_du_jour",
    "statut_effectif",
    "verifier_enveloppe",
    "verifier_taches_dues",
]
