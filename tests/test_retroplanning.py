"""Tests pour le retro-planning des obligations annuelles."""

from __future__ import annotations

import datetime

import pytest

from gouvsas.echeances.retroplanning import (
    InvalidInput,
    ancrer_fin_exercice,
    construire_cycle,
    extraire_fin_exercice,
    planifier_cycle,
    planifier_obligations,
)
from gouvsas.models.taches import (
    GovernanceParameters,
    ObligationTask,
    RoleResponsable,
    TypeObligation,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _par_type(obligations: list[ObligationTask]) -> dict[TypeObligation, ObligationTask]:
    return {o.type: o for o in obligations}


def _date(obligations: list[ObligationTask], type_: TypeObligation) -> datetime.date:
    return _par_type(obligations)[type_].due_date


ORDRE = [
    TypeObligation.COLLECT_YEAR_INPUTS,
    TypeObligation.COLLECT_ACCOUNTS,
    TypeObligation.DRAFT_AGM_PACK,
    TypeObligation.SEND_CONVOCATIONS,
    TypeObligation.HOLD_AGM,
    TypeObligation.FILE_ACCOUNTS,
    TypeObligation.ARCHIVE,
]


# ---------------------------------------------------------------------------
# Tests: fin d'exercice au 31 decembre
# ---------------------------------------------------------------------------


class TestFinDecembre:
    """FYE 31 decembre, cycle 2024, parametres par defaut."""

    @pytest.fixture
    def obligations(self) -> list[ObligationTask]:
        return planifier_obligations("2024-12-31", 2024)

    def test_collect_year_inputs_avril(self, obligations) -> None:
        """FYE + 4 mois tombe en avril 2025 (31 avril -> 30 avril)."""
        d = _date(obligations, TypeObligation.COLLECT_YEAR_INPUTS)
        assert (d.year, d.month) == (2025, 4)
        assert d == datetime.date(2025, 4, 30)

    def test_collect_accounts_mi_mai(self, obligations) -> None:
        d = _date(obligations, TypeObligation.COLLECT_ACCOUNTS)
        assert d == datetime.date(2025, 5, 15)

    def test_draft_agm_pack_mai(self, obligations) -> None:
        d = _date(obligations, TypeObligation.DRAFT_AGM_PACK)
        assert d == datetime.date(2025, 5, 31)

    def test_send_convocations(self, obligations) -> None:
        """floor(180/30)=6 mois moins (15 + 5) jours."""
        d = _date(obligations, TypeObligation.SEND_CONVOCATIONS)
        assert d.year == 2025
        assert d.month >= 5
        assert d == datetime.date(2025, 6, 10)

    def test_hold_agm_juin(self, obligations) -> None:
        """FYE + 173 jours."""
        d = _date(obligations, TypeObligation.HOLD_AGM)
        assert d == datetime.date(2024, 12, 31) + datetime.timedelta(days=173)
        assert d == datetime.date(2025, 6, 22)

    def test_file_accounts_un_mois_apres_ag(self, obligations) -> None:
        ag = _date(obligations, TypeObligation.HOLD_AGM)
        depot = _date(obligations, TypeObligation.FILE_ACCOUNTS)
        assert depot == datetime.date(2025, 7, 22)
        assert depot.day == ag.day
        assert depot.month == ag.month + 1

    def test_archive_14_jours_apres_depot(self, obligations) -> None:
        depot = _date(obligations, TypeObligation.FILE_ACCOUNTS)
        archive = _date(obligations, TypeObligation.ARCHIVE)
        assert archive - depot == datetime.timedelta(days=14)
        assert archive == datetime.date(2025, 8, 5)

    def test_ordre_et_nombre(self, obligations) -> None:
        assert len(obligations) == 7
        assert [o.type for o in obligations] == ORDRE

    def test_responsables(self, obligations) -> None:
        roles = {o.type: o.owner_role for o in obligations}
        assert roles[TypeObligation.COLLECT_ACCOUNTS] == RoleResponsable.ACCOUNTANT
        for type_ in ORDRE:
            if type_ != TypeObligation.COLLECT_ACCOUNTS:
                assert roles[type_] == RoleResponsable.PRESIDENT

    def test_cycle_year_copie(self, obligations) -> None:
        assert all(o.cycle_year == 2024 for o in obligations)

    def test_description_convocation_mentionne_preavis(self, obligations) -> None:
        convocation = _par_type(obligations)[TypeObligation.SEND_CONVOCATIONS]
        assert convocation.description == "Must be sent at least 15 days before AGM"
        assert convocation.title == "Send AGM convocations to shareholders"

    def test_relations_chronologiques(self, obligations) -> None:
        """Relations garanties avec les parametres par defaut."""
        dates = {o.type: o.due_date for o in obligations}
        assert dates[TypeObligation.COLLECT_YEAR_INPUTS] < dates[TypeObligation.COLLECT_ACCOUNTS]
        assert dates[TypeObligation.COLLECT_ACCOUNTS] < dates[TypeObligation.DRAFT_AGM_PACK]
        assert dates[TypeObligation.DRAFT_AGM_PACK] < dates[TypeObligation.SEND_CONVOCATIONS]
        assert dates[TypeObligation.SEND_CONVOCATIONS] < dates[TypeObligation.HOLD_AGM]
        assert dates[TypeObligation.HOLD_AGM] < dates[TypeObligation.FILE_ACCOUNTS]
        assert dates[TypeObligation.FILE_ACCOUNTS] < dates[TypeObligation.ARCHIVE]


# ---------------------------------------------------------------------------
# Tests: autres fins d'exercice et parametres
# ---------------------------------------------------------------------------


class TestAutresFinsExercice:
    """Fins d'exercice hors decembre et parametres personnalises."""

    def test_fin_mars(self) -> None:
        """FYE 31 mars 2024: collecte en juillet 2024."""
        cycle = construire_cycle("acme", "2024-03-31", 2024)
        assert ancrer_fin_exercice(
            cycle.fiscal_year_end_month, cycle.fiscal_year_end_day, 2024
        ) == datetime.date(2024, 3, 31)

        obligations = planifier_obligations("2024-03-31", 2024)
        assert _date(obligations, TypeObligation.COLLECT_YEAR_INPUTS) == datetime.date(2024, 7, 31)

    def test_annee_de_la_date_ignoree(self) -> None:
        """Seuls le mois et le jour de la FYE stockee comptent."""
        a = planifier_obligations(datetime.date(2019, 12, 31), 2024)
        b = planifier_obligations(datetime.date(2024, 12, 31), 2024)
        assert a == b

    def test_mois_court_borne_fin_de_mois(self) -> None:
        """31 octobre + 4 mois = 28 fevrier (pas de report en mars)."""
        obligations = planifier_obligations("2024-10-31", 2024)
        assert _date(obligations, TypeObligation.COLLECT_YEAR_INPUTS) == datetime.date(2025, 2, 28)
        assert _date(obligations, TypeObligation.COLLECT_ACCOUNTS) == datetime.date(2025, 3, 15)
        assert _date(obligations, TypeObligation.DRAFT_AGM_PACK) == datetime.date(2025, 3, 31)

    def test_29_fevrier_annee_non_bissextile(self) -> None:
        assert ancrer_fin_exercice(2, 29, 2023) == datetime.date(2023, 2, 28)
        obligations = planifier_obligations("2024-02-29", 2023)
        assert _date(obligations, TypeObligation.COLLECT_YEAR_INPUTS) == datetime.date(2023, 6, 28)

    def test_parametres_personnalises(self) -> None:
        parametres = GovernanceParameters(notice_period_days=30, approval_deadline_days=240)
        obligations = planifier_obligations("2024-12-31", 2024, parametres)
        # 8 mois - 35 jours
        assert _date(obligations, TypeObligation.SEND_CONVOCATIONS) == datetime.date(2025, 7, 27)
        assert _date(obligations, TypeObligation.HOLD_AGM) == datetime.date(2025, 8, 21)
        assert _date(obligations, TypeObligation.FILE_ACCOUNTS) == datetime.date(2025, 9, 21)
        assert _date(obligations, TypeObligation.ARCHIVE) == datetime.date(2025, 10, 5)

    def test_floor_des_mois(self) -> None:
        """approbation 209 jours -> floor(209/30) = 6 mois, comme 180."""
        p180 = GovernanceParameters(approval_deadline_days=180)
        p209 = GovernanceParameters(approval_deadline_days=209)
        a = planifier_obligations("2024-12-31", 2024, p180)
        b = planifier_obligations("2024-12-31", 2024, p209)
        assert _date(a, TypeObligation.SEND_CONVOCATIONS) == _date(b, TypeObligation.SEND_CONVOCATIONS)

    def test_defauts_equivalents(self) -> None:
        explicite = planifier_obligations(
            "2024-12-31",
            2024,
            GovernanceParameters(notice_period_days=15, approval_deadline_days=180),
        )
        assert planifier_obligations("2024-12-31", 2024) == explicite

    def test_inversion_convocation_preservee(self) -> None:
        """Delai court: la convocation precede le dossier d'AG, sans correction."""
        parametres = GovernanceParameters(notice_period_days=15, approval_deadline_days=30)
        obligations = planifier_obligations("2024-12-31", 2024, parametres)
        assert _date(obligations, TypeObligation.SEND_CONVOCATIONS) == datetime.date(2025, 1, 11)
        assert _date(obligations, TypeObligation.HOLD_AGM) == datetime.date(2025, 1, 23)
        assert _date(obligations, TypeObligation.SEND_CONVOCATIONS) < _date(
            obligations, TypeObligation.DRAFT_AGM_PACK
        )
        assert [o.type for o in obligations] == ORDRE

    def test_annee_hors_plage_acceptee(self) -> None:
        obligations = planifier_obligations("2024-12-31", 1850)
        assert len(obligations) == 7
        assert _date(obligations, TypeObligation.COLLECT_YEAR_INPUTS) == datetime.date(1851, 4, 30)

    def test_annee_9999_depasse_date_max(self) -> None:
        """Les echeances de 9999 tombent en 10000: InvalidInput, pas ValueError brute."""
        with pytest.raises(InvalidInput, match="9999"):
            planifier_obligations("2024-12-31", 9999)

    def test_annee_9998_representable(self) -> None:
        obligations = planifier_obligations("2024-12-31", 9998)
        assert _date(obligations, TypeObligation.ARCHIVE) == datetime.date(9999, 8, 5)

    def test_planifier_cycle(self) -> None:
        cycle = construire_cycle(
            "acme",
            "2024-12-31",
            2024,
            GovernanceParameters(notice_period_days=20, approval_deadline_days=180),
        )
        assert cycle.notice_period_days == 20
        obligations = planifier_cycle(cycle)
        assert _date(obligations, TypeObligation.SEND_CONVOCATIONS) == datetime.date(2025, 6, 5)


# ---------------------------------------------------------------------------
# Tests: idempotence et entrees invalides
# ---------------------------------------------------------------------------


class TestIdempotenceEtErreurs:
    """Idempotence et InvalidInput."""

    def test_idempotence(self) -> None:
        a = planifier_obligations("2024-12-31", 2024)
        b = planifier_obligations("2024-12-31", 2024)
        assert [o.model_dump_json() for o in a] == [o.model_dump_json() for o in b]

    @pytest.mark.parametrize(
        "valeur",
        ["2024-12-31", "2024-12-31T00:00:00Z", "2024-12-31T00:00:00.000+00:00"],
    )
    def test_formats_acceptes(self, valeur: str) -> None:
        assert extraire_fin_exercice(valeur) == (12, 31)

    def test_datetime_accepte(self) -> None:
        assert extraire_fin_exercice(datetime.datetime(2024, 6, 30, 23, 0)) == (6, 30)

    @pytest.mark.parametrize("valeur", ["pas une date", "", "2024-13-01", "2024-02-30", None])
    def test_invalid_input(self, valeur) -> None:
        with pytest.raises(InvalidInput):
            planifier_obligations(valeur, 2024)

    def test_invalid_input_est_value_error(self) -> None:
        with pytest.raises(ValueError):
            planifier_obligations("31/12/2024", 2024)
