"""Sous-commandes CLI pour les societes et leurs profils de gouvernance."""

from __future__ import annotations

import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gouvsas.models.societe import Company, GovernanceProfile
from gouvsas.registre.societes import RegistreSocietes, SocieteIntrouvable

societe_app = typer.Typer(no_args_is_help=True)
console = Console()


def _get_registre() -> RegistreSocietes:
    """Retourne le registre des societes."""
    from gouvsas.cli.app import get_data_dir

    return RegistreSocietes(chemin=get_data_dir() / "societes.yaml")


@societe_app.command(name="ajouter")
def ajouter(
    identifiant: str = typer.Argument(..., help="Identifiant de la societe"),
    nom: str = typer.Option(..., "--nom", "-n", help="Raison sociale"),
    fin_exercice: str = typer.Option(
        "2024-12-31", "--fin-exercice", "-f", help="Date de fin d'exercice (AAAA-MM-JJ)"
    ),
    president: str = typer.Option("", "--president", "-p", help="Nom du president"),
    courriel: str = typer.Option("", "--courriel", "-c", help="Courriel du president"),
    siren: Optional[str] = typer.Option(None, "--siren", help="Numero SIREN"),
) -> None:
    """Ajouter une societe au registre."""
    try:
        date_fin = datetime.date.fromisoformat(fin_exercice)
    except ValueError:
        console.print(f"[red]Erreur: date de fin d'exercice invalide: {fin_exercice}[/red]")
        raise typer.Exit(1)

    societe = Company(
        id=identifiant,
        name=nom,
        fiscal_year_end=date_fin,
        president_name=president,
        president_email=courriel,
        siren=siren,
    )
    try:
        _get_registre().ajouter(societe)
    except ValueError as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]Societe {identifiant} ajoutee (fin d'exercice {date_fin:%d/%m}).[/green]")


@societe_app.command(name="profil")
def profil(
    identifiant: str = typer.Argument(..., help="Identifiant de la societe"),
    preavis: Optional[int] = typer.Option(
        None, "--preavis", min=0, help="Preavis de convocation en jours (defaut 15)"
    ),
    approbation: Optional[int] = typer.Option(
        None, "--approbation", min=0, help="Delai d'approbation des comptes en jours (defaut 180)"
    ),
) -> None:
    """Definir le profil de gouvernance (preavis, delai d'approbation)."""
    nouveau = GovernanceProfile(
        company_id=identifiant,
        notice_period_days=preavis,
        approval_deadline_days=approbation,
    )
    try:
        _get_registre().definir_profil(nouveau)
    except SocieteIntrouvable as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    parametres = nouveau.parametres()
    console.print(
        f"[green]Profil enregistre: preavis {parametres.notice_period_days} jours, "
        f"approbation {parametres.approval_deadline_days} jours.[/green]"
    )


@societe_app.command(name="lister")
def lister() -> None:
    """Lister les societes du registre."""
    registre = _get_registre()
    societes = registre.lister()
    if not societes:
        console.print("[yellow]Aucune societe dans le registre.[/yellow]")
        return

    tableau = Table(title="Societes", show_header=True)
    tableau.add_column("Id", style="cyan")
    tableau.add_column("Nom")
    tableau.add_column("Fin d'exercice", justify="center")
    tableau.add_column("Preavis", justify="right")
    tableau.add_column("Approbation", justify="right")

    for s in societes:
        p = registre.profil(s.id)
        parametres = p.parametres() if p else None
        tableau.add_row(
            s.id,
            s.name,
            f"{s.fiscal_year_end:%d/%m}",
            str(parametres.notice_period_days) if parametres else "15 (defaut)",
            str(parametres.approval_deadline_days) if parametres else "180 (defaut)",
        )

    console.print(tableau)
