"""Outils MCP du calendrier de gouvernance.

Expose la generation du calendrier annuel, la liste des taches et la
verification des echeances. Les outils delegent a gouvsas.services.
"""

from __future__ import annotations

from mcp.server.fastmcp import Context
from mcp.server.session import ServerSession

from gouvsas.echeances.retroplanning import InvalidInput
from gouvsas.mcp.server import AppContext, mcp
from gouvsas.registre.societes import SocieteIntrouvable
from gouvsas.services import (
    ErreurValidation,
    generer_calendrier,
    lister_taches,
    valider_requete_calendrier,
    verifier_echeances,
)

MSG_LECTURE_SEULE = "Mode lecture seule actif. Les modifications sont desactivees."


def generer_calendrier_outil(app: AppContext, company_id: str, annee: int) -> dict:
    """Corps de l'outil generer_calendrier, independant du transport."""
    if app.read_only:
        return {"status": "erreur", "message": MSG_LECTURE_SEULE}
    try:
        requete = valider_requete_calendrier({"companyId": company_id, "cycleYear": annee})
        resultat = generer_calendrier(requete, app.societes, app.taches)
    except (ErreurValidation, SocieteIntrouvable, InvalidInput) as e:
        return {"status": "erreur", "message": str(e)}
    return {"status": "ok", **resultat}


@mcp.tool()
def generer_calendrier_annuel(
    company_id: str,
    annee: int,
    ctx: Context[ServerSession, AppContext] = None,
) -> dict:
    """Generer le calendrier des 7 obligations annuelles d'une SAS.

    Remplace les taches existantes du meme cycle. Les delais (preavis,
    approbation) proviennent du profil de gouvernance (defaut 15 / 180 jours).

    Args:
        company_id: Identifiant de la societe.
        annee: Annee du cycle (2000 a 2100).
    """
    return generer_calendrier_outil(ctx.request_context.lifespan_context, company_id, annee)


@mcp.tool()
def lister_taches_cycle(
    company_id: str,
    annee: int | None = None,
    ctx: Context[ServerSession, AppContext] = None,
) -> dict:
    """Lister les taches d'une societe, triees par echeance.

    Args:
        company_id: Identifiant de la societe.
        annee: Annee du cycle (optionnel, toutes par defaut).
    """
    app = ctx.request_context.lifespan_context
    taches = lister_taches(app.taches, company_id, annee)
    return {"nb_taches": len(taches), "taches": taches}


@mcp.tool()
def verifier_echeances_dues(
    company_id: str | None = None,
    ctx: Context[ServerSession, AppContext] = None,
) -> dict:
    """Lister les taches en retard ou dues dans les 14 prochains jours.

    Args:
        company_id: Restreindre a une societe (optionnel).
    """
    app = ctx.request_context.lifespan_context
    return verifier_echeances(app.taches, app.societes, company_id)
