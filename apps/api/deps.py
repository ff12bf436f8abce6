from fastapi import Depends

from core.config import settings
from core.security import get_current_user
from domain.models import Identity


def get_settings():
    """Provides application settings/config globally."""
    return settings


def get_current_active_user(user: Identity = Depends(get_current_user)) -> Identity:
    """
    Single configured admin for now.
    Later: check disabled accounts, roles, etc.
    """
    return user
