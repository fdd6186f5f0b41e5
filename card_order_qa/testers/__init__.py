from .form_session import FormSession
from .scenarios import SCENARIOS, select_scenarios

__all__ = ["FormSession", "SCENARIOS", "select_scenarios"]
