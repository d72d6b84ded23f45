"""GouvSAS - Retro-planning des obligations annuelles de gouvernance d'une SAS."""

__version__ = "0.1.0"
