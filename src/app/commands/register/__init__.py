"""Comando /register de perfis do Rocket League Tracker."""

from app.commands.register.handler import (
    COMMAND_NAME,
    RegisterCommandConfig,
    RegisterHandler,
)
from app.commands.register.tracker_urls import TrackerProfile, validate_tracker_url

__all__ = [
    "COMMAND_NAME",
    "RegisterCommandConfig",
    "RegisterHandler",
    "TrackerProfile",
    "validate_tracker_url",
]
