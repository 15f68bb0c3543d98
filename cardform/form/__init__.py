"""Form state: field store, snapshots, card data and validation."""

from cardform.form.brands import ALLOWED_BRANDS, BrandClassifier, CardBrand, classify_brand
from cardform.form.cards import CardDetails
from cardform.form.focus import focus_affordance
from cardform.form.models import (
    ABSENT_CARD,
    AbsentCard,
    CardEntry,
    FocusAffordance,
    FormSnapshot,
    PresentCard,
    card_entry,
)
from cardform.form.store import FieldStore
from cardform.form.validation import MIN_CLASSIFIABLE_LENGTH, is_allowed_card, is_valid

__all__ = [
    "ABSENT_CARD",
    "ALLOWED_BRANDS",
    "AbsentCard",
    "BrandClassifier",
    "CardBrand",
    "CardDetails",
    "CardEntry",
    "FieldStore",
    "FocusAffordance",
    "FormSnapshot",
    "MIN_CLASSIFIABLE_LENGTH",
    "PresentCard",
    "card_entry",
    "classify_brand",
    "focus_affordance",
    "is_allowed_card",
    "is_valid",
]
