"""Runtime services: telemetry and settings."""

from . import telemetry
from .settings import Settings

__all__ = ["Settings", "telemetry"]
