"""API HTTP GouvSAS."""

from gouvsas.api.app import create_app

__all__ = ["create_app"]
