from .config import DEFAULT_CONFIG
from .driver import Driver
from .session import BrowserSession, BrowserSessionManager

__all__ = ["DEFAULT_CONFIG", "Driver", "BrowserSession", "BrowserSessionManager"]
