"""Lecture et ecriture YAML partagees par les registres."""

from __future__ import annotations

import os
import tempfile
import threading
from pathlib import Path

import yaml

_verrous: dict[Path, threading.RLock] = {}
_verrous_guard = threading.Lock()


def verrou_fichier(chemin: Path) -> threading.RLock:
    """Retourne le verrou associe a un fichier de registre (un par chemin)."""
    cle = chemin.resolve()
    with _verrous_guard:
        if cle not in _verrous:
            _verrous[cle] = threading.RLock()
        return _verrous[cle]


def charger_yaml(chemin: Path):
    """Charge un fichier YAML, ou None s'il n'existe pas."""
    if not chemin.exists():
        return None
    with open(chemin, encoding="utf-8") as f:
        return yaml.safe_load(f)


def sauvegarder_yaml(chemin: Path, donnees) -> None:
    """Ecrit le YAML dans un fichier temporaire puis le renomme."""
    chemin.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp = tempfile.mkstemp(dir=chemin.parent, prefix=f".{chemin.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            yaml.dump(donnees, f, default_flow_style=False, allow_unicode=True, sort_keys=False)
        os.replace(tmp, chemin)
    except BaseException:
        Path(tmp).unlink(missing_ok=True)
        raise
