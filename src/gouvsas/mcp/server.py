"""Serveur MCP GouvSAS -- point d'entree FastMCP avec lifespan et contexte partage.

Usage:
    python -m gouvsas.mcp.server          # stdio

Variables d'environnement:
    GOUVSAS_DATA_DIR -- dossier des registres YAML (default: data)
    GOUVSAS_READONLY -- mode lecture seule (default: false)
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass

from mcp.server.fastmcp import FastMCP

from gouvsas.config import charger_config
from gouvsas.registre.societes import RegistreSocietes
from gouvsas.registre.taches import RegistreTaches


@dataclass
class AppContext:
    """Contexte applicatif injecte dans chaque outil MCP via le lifespan."""

    societes: RegistreSocietes
    taches: RegistreTaches
    read_only: bool


def construire_contexte() -> AppContext:
    """Ouvre les registres designes par la configuration."""
    config = charger_config()
    return AppContext(
        societes=RegistreSocietes(config.chemin_societes),
        taches=RegistreTaches(config.chemin_taches),
        read_only=config.read_only,
    )


@asynccontextmanager
async def app_lifespan(server: FastMCP) -> AsyncIterator[AppContext]:
    """Charge les registres au demarrage du serveur."""
    yield construire_contexte()


mcp = FastMCP("GouvSAS", lifespan=app_lifespan)

# Importer les modules d'outils (ils s'enregistrent via @mcp.tool())
import gouvsas.mcp.tools.calendrier  # noqa: E402, F401

if __name__ == "__main__":
    mcp.run(transport="stdio")
