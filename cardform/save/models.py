"""Save attempt states and outcomes."""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class SaveState(str, Enum):
    """Lifecycle of one save attempt.

    IDLE -> CAPTURING -> TOKENIZING -> PERSISTING -> SUCCEEDED | FAILED -> IDLE
    A tokenization failure goes straight to FAILED.
    """

    IDLE = "idle"
    CAPTURING = "capturing"
    TOKENIZING = "tokenizing"
    PERSISTING = "persisting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class SaveSuccess(BaseModel):
    """The card was tokenized and stored on the account."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["success"] = "success"
    attempt_id: int = Field(..., description="Generation number of the attempt")
    token_id: str = Field(..., description="Token stored as the payment method")


class SaveFailure(BaseModel):
    """Tokenization or persistence failed."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["failure"] = "failure"
    attempt_id: int = Field(..., description="Generation number of the attempt")
    message: str = Field(..., description="Human readable reason")
    stage: SaveState = Field(..., description="State the attempt failed in")


SaveOutcome = SaveSuccess | SaveFailure
