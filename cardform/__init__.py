"""cardform: reactive controller for an "add payment card" form."""

from cardform.controller import NewCardController

__all__ = ["NewCardController"]
