from .action_handler import ActionHandler
from .locators import DEFAULT_LOCATORS, LocatorContract
from .waits import WaitPredicate

__all__ = ["ActionHandler", "LocatorContract", "DEFAULT_LOCATORS", "WaitPredicate"]
