"""Save orchestration: tokenize a card, then store it on the account."""

from cardform.save.models import SaveFailure, SaveOutcome, SaveState, SaveSuccess
from cardform.save.orchestrator import SaveOrchestrator, build_card_payload

__all__ = [
    "SaveFailure",
    "SaveOrchestrator",
    "SaveOutcome",
    "SaveState",
    "SaveSuccess",
    "build_card_payload",
]
