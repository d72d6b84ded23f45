"""Sous-commandes CLI du calendrier annuel (generation, affichage, statut).

Usage:
    gsas calendrier generer acme 2024
    gsas calendrier afficher acme --annee 2024
    gsas calendrier statut <id> DONE
    gsas rappels
"""

from __future__ import annotations

import datetime
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from gouvsas.echeances.alertes import (
    REMINDER_INTERVALS,
    formater_rappels_cli,
    rappels_du_jour,
    statut_effectif,
    verifier_taches_dues,
)
from gouvsas.echeances.retroplanning import InvalidInput
from gouvsas.models.taches import TaskStatus
from gouvsas.registre.societes import RegistreSocietes, SocieteIntrouvable
from gouvsas.registre.taches import RegistreTaches, TacheIntrouvable
from gouvsas.services import ErreurValidation, generer_calendrier, valider_requete_calendrier

calendrier_app = typer.Typer(no_args_is_help=True)
console = Console()


def _get_registres() -> tuple[RegistreSocietes, RegistreTaches]:
    """Retourne (registre des societes, registre des taches)."""
    from gouvsas.cli.app import get_data_dir

    data_dir = get_data_dir()
    return (
        RegistreSocietes(chemin=data_dir / "societes.yaml"),
        RegistreTaches(chemin=data_dir / "taches.yaml"),
    )


def _statut_style(statut: TaskStatus) -> str:
    """Retourne le style Rich pour un statut de tache."""
    styles = {
        TaskStatus.TODO: "dim",
        TaskStatus.IN_PROGRESS: "yellow",
        TaskStatus.DONE: "green",
        TaskStatus.BLOCKED: "magenta",
        TaskStatus.LATE: "red bold",
    }
    return styles.get(statut, "")


@calendrier_app.command(name="generer")
def generer(
    identifiant: str = typer.Argument(..., help="Identifiant de la societe"),
    annee: int = typer.Argument(..., help="Annee du cycle (2000-2100)"),
) -> None:
    """Generer (ou regenerer) les 7 obligations du cycle annuel."""
    societes, taches = _get_registres()
    try:
        requete = valider_requete_calendrier({"companyId": identifiant, "cycleYear": annee})
        resultat = generer_calendrier(requete, societes, taches)
    except (ErreurValidation, SocieteIntrouvable, InvalidInput) as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]{resultat['tasksCreated']} taches creees pour {annee}.[/green]")
    for avertissement in resultat["warnings"]:
        console.print(f"[yellow]Attention: {avertissement}[/yellow]")
    _afficher(taches.lister(identifiant, annee), f"Calendrier {identifiant} {annee}")


def _afficher(liste, titre: str) -> None:
    aujourd_hui = datetime.date.today()
    tableau = Table(title=titre, show_header=True)
    tableau.add_column("Echeance", justify="center")
    tableau.add_column("Obligation", style="cyan")
    tableau.add_column("Responsable")
    tableau.add_column("Statut", justify="center")
    tableau.add_column("Id", style="dim")

    for t in liste:
        statut = statut_effectif(t, aujourd_hui)
        style = _statut_style(statut)
        tableau.add_row(
            f"{t.due_date:%d/%m/%Y}",
            t.title,
            t.owner_role.value,
            f"[{style}]{statut.value}[/{style}]" if style else statut.value,
            t.id,
        )

    console.print(tableau)


@calendrier_app.command(name="afficher")
def afficher(
    identifiant: str = typer.Argument(..., help="Identifiant de la societe"),
    annee: Optional[int] = typer.Option(None, "--annee", "-a", help="Annee du cycle"),
) -> None:
    """Afficher les taches d'une societe par ordre d'echeance."""
    _, taches = _get_registres()
    liste = taches.lister(identifiant, annee)
    if not liste:
        console.print("[yellow]Aucune tache. Lancez 'gsas calendrier generer'.[/yellow]")
        return
    _afficher(liste, f"Calendrier {identifiant}" + (f" {annee}" if annee else ""))


@calendrier_app.command(name="statut")
def statut(
    task_id: str = typer.Argument(..., help="Identifiant de la tache"),
    nouveau: TaskStatus = typer.Argument(..., help="Nouveau statut"),
) -> None:
    """Changer le statut d'une tache."""
    _, taches = _get_registres()
    try:
        tache = taches.mettre_a_jour_statut(task_id, nouveau)
    except TacheIntrouvable as e:
        console.print(f"[red]Erreur: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]{tache.title}: {tache.status.value}[/green]")


def rappels(
    identifiant: Optional[str] = typer.Option(
        None, "--societe", "-s", help="Restreindre a une societe"
    ),
    jalons: bool = typer.Option(
        False, "--jalons", help="Seulement les taches a J-30, J-14, J-7 ou J-1"
    ),
) -> None:
    """Afficher les taches en retard ou dues dans les 14 prochains jours."""
    _, taches = _get_registres()
    if jalons:
        _afficher_jalons(rappels_du_jour(taches.lister(identifiant)))
        return
    texte = formater_rappels_cli(verifier_taches_dues(taches.lister(identifiant)))
    if texte is None:
        console.print("[green]Aucune echeance proche.[/green]")
        return
    console.print(texte)


def _afficher_jalons(liste) -> None:
    if not liste:
        jours = ", ".join(f"J-{j}" for j in REMINDER_INTERVALS)
        console.print(f"[green]Aucun rappel aujourd'hui ({jours}).[/green]")
        return
    for tache, jours in liste:
        couleur = "yellow" if jours <= 7 else "blue"
        console.print(
            f"[{couleur}]{tache.due_date} dans {jours} jours: "
            f"{tache.title} ({tache.owner_role.value})[/{couleur}]"
        )
