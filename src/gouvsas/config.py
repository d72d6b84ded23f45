"""Configuration GouvSAS lue depuis l'environnement (et un fichier .env).

Variables d'environnement:
    GOUVSAS_DATA_DIR  -- dossier des registres YAML (default: data)
    GOUVSAS_READONLY  -- mode lecture seule (default: false)
    GOUVSAS_LOG_LEVEL -- niveau de journalisation (default: INFO)
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class ConfigGouvSAS(BaseModel):
    """Configuration applicative."""

    data_dir: Path = Path("data")
    read_only: bool = False
    log_level: str = "INFO"

    @property
    def chemin_societes(self) -> Path:
        return self.data_dir / "societes.yaml"

    @property
    def chemin_taches(self) -> Path:
        return self.data_dir / "taches.yaml"


def charger_config() -> ConfigGouvSAS:
    """Construit la configuration a partir des variables d'environnement."""
    return ConfigGouvSAS(
        data_dir=Path(os.environ.get("GOUVSAS_DATA_DIR", "data")),
        read_only=os.environ.get("GOUVSAS_READONLY", "false").lower() == "true",
        log_level=os.environ.get("GOUVSAS_LOG_LEVEL", "INFO").upper(),
    )


def configurer_logging(niveau: str = "INFO") -> None:
    """Configure le logging racine (format court, niveau donne)."""
    logging.basicConfig(
        level=getattr(logging, niveau.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
