"""Validation classifier over form snapshots.

Pure functions: no state, no I/O. Validation failures are never errors,
they only drive the save button and the disallowed-card warning.
"""

from collections.abc import Collection

from cardform.form.brands import ALLOWED_BRANDS, BrandClassifier, CardBrand, classify_brand
from cardform.form.models import FormSnapshot

# Numbers shorter than this are too short to classify
MIN_CLASSIFIABLE_LENGTH = 3


def is_allowed_card(
    snapshot: FormSnapshot,
    *,
    allowed: Collection[CardBrand] = ALLOWED_BRANDS,
    classify: BrandClassifier = classify_brand,
    min_length: int = MIN_CLASSIFIABLE_LENGTH,
) -> bool:
    """Whether the typed card number belongs to an accepted brand.

    Short numbers count as allowed so the warning does not flash while the
    user is still typing.
    """
    if len(snapshot.card_number) < min_length:
        return True
    return classify(snapshot.card_number) in allowed


def is_valid(
    snapshot: FormSnapshot,
    *,
    allowed: Collection[CardBrand] = ALLOWED_BRANDS,
    classify: BrandClassifier = classify_brand,
    min_length: int = MIN_CLASSIFIABLE_LENGTH,
) -> bool:
    """Whether the form can be saved."""
    if not snapshot.name or not snapshot.postal_code:
        return False

    card = snapshot.card
    return (
        card.is_present
        and is_allowed_card(snapshot, allowed=allowed, classify=classify, min_length=min_length)
        and card.number_valid
        and card.expiry_valid
        and card.cvc_valid
    )
