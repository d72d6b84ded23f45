"""API HTTP GouvSAS (Flask).

Routes:
    POST  /generate-timeline              {"companyId", "cycleYear"}
    GET   /companies/<id>/tasks?cycleYear=
    PATCH /tasks/<id>                     {"status"}
    POST  /check-due-tasks                {"companyId"?}
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify, request

from gouvsas.config import ConfigGouvSAS, charger_config
from gouvsas.echeances.retroplanning import InvalidInput
from gouvsas.registre.societes import RegistreSocietes, SocieteIntrouvable
from gouvsas.registre.taches import RegistreTaches, TacheIntrouvable
from gouvsas.services import (
    ErreurValidation,
    generer_calendrier,
    lister_taches,
    valider_requete_calendrier,
    valider_requete_statut,
    verifier_echeances,
)

logger = logging.getLogger(__name__)

MSG_LECTURE_SEULE = "Mode lecture seule actif. Les modifications sont desactivees."


def _corps_json():
    """Retourne le corps JSON, ou leve ErreurValidation s'il est illisible."""
    corps = request.get_json(silent=True)
    if corps is None:
        raise ErreurValidation(["Invalid JSON body"])
    return corps


def create_app(
    config: ConfigGouvSAS | None = None,
    societes: RegistreSocietes | None = None,
    taches: RegistreTaches | None = None,
) -> Flask:
    """Construit l'application Flask avec ses registres."""
    config = config or charger_config()
    app = Flask(__name__)
    app.extensions["gouvsas"] = {
        "config": config,
        "societes": societes or RegistreSocietes(config.chemin_societes),
        "taches": taches or RegistreTaches(config.chemin_taches),
    }

    def _ctx() -> dict:
        return app.extensions["gouvsas"]

    @app.errorhandler(ErreurValidation)
    def _erreur_validation(e: ErreurValidation):
        return jsonify({"error": str(e), "details": e.erreurs}), 400

    @app.errorhandler(SocieteIntrouvable)
    @app.errorhandler(TacheIntrouvable)
    def _introuvable(e: LookupError):
        return jsonify({"error": str(e)}), 404

    @app.errorhandler(InvalidInput)
    def _entree_invalide(e: InvalidInput):
        logger.error("Donnees de societe invalides: %s", e)
        return jsonify({"error": str(e)}), 422

    @app.post("/generate-timeline")
    def generate_timeline():
        ctx = _ctx()
        if ctx["config"].read_only:
            return jsonify({"error": MSG_LECTURE_SEULE}), 403
        requete = valider_requete_calendrier(_corps_json())
        try:
            resultat = generer_calendrier(requete, ctx["societes"], ctx["taches"])
        except (SocieteIntrouvable, InvalidInput):
            raise
        except Exception as e:
            logger.exception("Erreur dans generate-timeline")
            return jsonify({"error": str(e) or "Unknown error"}), 500
        return jsonify(resultat)

    @app.get("/companies/<company_id>/tasks")
    def list_tasks(company_id: str):
        brut = request.args.get("cycleYear")
        try:
            cycle_year = int(brut) if brut is not None else None
        except ValueError:
            raise ErreurValidation(["cycleYear must be a number"]) from None
        return jsonify({"tasks": lister_taches(_ctx()["taches"], company_id, cycle_year)})

    @app.patch("/tasks/<task_id>")
    def update_task_status(task_id: str):
        ctx = _ctx()
        if ctx["config"].read_only:
            return jsonify({"error": MSG_LECTURE_SEULE}), 403
        statut = valider_requete_statut(_corps_json())
        tache = ctx["taches"].mettre_a_jour_statut(task_id, statut)
        return jsonify(tache.model_dump(mode="json"))

    @app.post("/check-due-tasks")
    def check_due_tasks():
        ctx = _ctx()
        corps = request.get_json(silent=True) or {}
        company_id = corps.get("companyId") if isinstance(corps, dict) else None
        return jsonify(verifier_echeances(ctx["taches"], ctx["societes"], company_id))

    return app
