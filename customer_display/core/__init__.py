# Core modules

from .config import Settings, get_settings
from .display_state import CartView, DisplayState, DisplayStateStore

__all__ = ["Settings", "get_settings", "CartView", "DisplayState", "DisplayStateStore"]
