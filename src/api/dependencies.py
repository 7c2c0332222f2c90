"""
FastAPI dependencies for dependency injection.

Settings come from app.state so an app built with explicit settings (tests,
alternate deployments) never falls back to the environment.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.checker.validator import KeyValidator
from src.shared.config import Settings


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was created with."""
    return request.app.state.settings


def get_key_validator(settings: Annotated[Settings, Depends(get_app_settings)]) -> KeyValidator:
    """Create a key validator bound to the application settings."""
    return KeyValidator(settings)


# Type aliases for dependency injection
SettingsDep = Annotated[Settings, Depends(get_app_settings)]
KeyValidatorDep = Annotated[KeyValidator, Depends(get_key_validator)]
