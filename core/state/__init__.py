from core.state.form_state import FormState, FormStatus
from core.state.keyed_trigger import KeyedTrigger

__all__ = ["FormState", "FormStatus", "KeyedTrigger"]
