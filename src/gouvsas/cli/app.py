"""Application CLI principale GouvSAS."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

import gouvsas
from gouvsas.config import charger_config, configurer_logging

app = typer.Typer(
    name="gsas",
    help="GouvSAS - Obligations annuelles de gouvernance d'une SAS",
    no_args_is_help=True,
)

console = Console()

# Options globales stockees via le callback
_data_dir: Path = Path("data")


def get_data_dir() -> Path:
    """Retourne le dossier des registres YAML."""
    return _data_dir


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"GouvSAS version {gouvsas.__version__}")
        raise typer.Exit()


@app.callback()
def main(
    data: Optional[str] = typer.Option(
        None,
        "--data",
        "-d",
        help="Dossier des registres (defaut: $GOUVSAS_DATA_DIR ou data)",
    ),
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        help="Afficher la version de GouvSAS",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """GouvSAS - Retro-planning des obligations annuelles d'une SAS."""
    global _data_dir
    config = charger_config()
    configurer_logging(config.log_level)
    _data_dir = Path(data) if data else config.data_dir


# Import et enregistrement des sous-commandes
from gouvsas.cli.calendrier import calendrier_app, rappels  # noqa: E402
from gouvsas.cli.societe import societe_app  # noqa: E402

app.add_typer(societe_app, name="societe", help="Gerer les societes et leurs profils")
app.add_typer(calendrier_app, name="calendrier", help="Generer et suivre le calendrier annuel")
app.command(name="rappels", help="Afficher les taches en retard ou dues sous 14 jours")(rappels)
