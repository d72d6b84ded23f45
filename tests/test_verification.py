"""Tests pour la verification d'enveloppe du retro-planning."""

from __future__ import annotations

from gouvsas.echeances.retroplanning import planifier_obligations
from gouvsas.echeances.verification import Severite, anomalies, verifier_enveloppe
from gouvsas.models.taches import GovernanceParameters


def _resultats(parametres: GovernanceParameters) -> dict[str, object]:
    obligations = planifier_obligations("2024-12-31", 2024, parametres)
    return {r.nom: r for r in verifier_enveloppe(obligations, parametres)}


class TestVerifierEnveloppe:
    """Tests pour verifier_enveloppe()."""

    def test_defauts_ordre_respecte(self) -> None:
        resultats = _resultats(GovernanceParameters())
        assert resultats["Comptes avant convocations"].passe
        assert resultats["Dossier d'AG avant convocations"].passe
        assert resultats["Convocations avant AG"].passe

    def test_defauts_preavis_court_signale(self) -> None:
        """6 mois - 20 jours laisse 12 jours avant l'AG du 22 juin."""
        resultat = _resultats(GovernanceParameters())["Preavis de convocation"]
        assert not resultat.passe
        assert resultat.severite == Severite.INFO
        assert "12 jours" in resultat.message

    def test_defauts_sans_anomalie(self) -> None:
        obligations = planifier_obligations("2024-12-31", 2024)
        assert anomalies(verifier_enveloppe(obligations)) == []

    def test_delai_court_inversion_signalee(self) -> None:
        resultats = _resultats(GovernanceParameters(approval_deadline_days=30))
        dossier = resultats["Dossier d'AG avant convocations"]
        comptes = resultats["Comptes avant convocations"]
        assert not dossier.passe
        assert not comptes.passe
        assert dossier.severite == Severite.WARNING
        assert "SEND_CONVOCATIONS" in dossier.message
        assert "DRAFT_AGM_PACK" in dossier.message

    def test_convocation_apres_ag(self) -> None:
        resultats = _resultats(
            GovernanceParameters(notice_period_days=0, approval_deadline_days=0)
        )
        assert not resultats["Convocations avant AG"].passe

    def test_verification_ne_modifie_pas_les_dates(self) -> None:
        parametres = GovernanceParameters(approval_deadline_days=30)
        obligations = planifier_obligations("2024-12-31", 2024, parametres)
        avant = [o.due_date for o in obligations]
        verifier_enveloppe(obligations, parametres)
        assert [o.due_date for o in obligations] == avant

    def test_anomalies_filtre(self) -> None:
        obligations = planifier_obligations(
            "2024-12-31", 2024, GovernanceParameters(notice_period_days=5)
        )
        # 6 mois - 10 jours = 20 juin; AG le 22 juin: 2 jours < 5
        resultats = verifier_enveloppe(obligations, GovernanceParameters(notice_period_days=5))
        assert anomalies(resultats) == []
        echecs = anomalies(resultats, Severite.INFO)
        assert [r.nom for r in echecs] == ["Preavis de convocation"]
