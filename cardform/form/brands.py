"""Card brand detection from the leading digits of a card number.

Classification works on partial input so the form can react while the user
is still typing: ``"4"`` is already Visa, ``"3"`` is still unknown.
"""

from collections.abc import Callable
from enum import Enum


class CardBrand(str, Enum):
    """Card networks recognised by the brand classifier."""

    AMERICAN_EXPRESS = "american_express"
    DINERS_CLUB = "diners_club"
    DISCOVER = "discover"
    JCB = "jcb"
    MASTERCARD = "mastercard"
    VISA = "visa"
    UNIONPAY = "unionpay"
    UNKNOWN = "unknown"


# Brands the payment processor accepts
ALLOWED_BRANDS: frozenset[CardBrand] = frozenset({
    CardBrand.AMERICAN_EXPRESS,
    CardBrand.DINERS_CLUB,
    CardBrand.DISCOVER,
    CardBrand.JCB,
    CardBrand.MASTERCARD,
    CardBrand.VISA,
})

# Checked in order; the first brand with a matching prefix wins
BRAND_PREFIXES: tuple[tuple[CardBrand, tuple[str, ...]], ...] = (
    (CardBrand.AMERICAN_EXPRESS, ("34", "37")),
    (CardBrand.DISCOVER, ("60", "64", "65")),
    (CardBrand.JCB, ("35",)),
    (
        CardBrand.DINERS_CLUB,
        ("300", "301", "302", "303", "304", "305", "309", "36", "38", "39"),
    ),
    (CardBrand.VISA, ("4",)),
    (
        CardBrand.MASTERCARD,
        (
            "2221", "2222", "2223", "2224", "2225", "2226", "2227", "2228", "2229",
            "223", "224", "225", "226", "227", "228", "229",
            "23", "24", "25", "26", "270", "271", "2720",
            "50", "51", "52", "53", "54", "55", "67",
        ),
    ),
    (CardBrand.UNIONPAY, ("62",)),
)

VALID_LENGTHS: dict[CardBrand, frozenset[int]] = {
    CardBrand.AMERICAN_EXPRESS: frozenset({15}),
    CardBrand.DINERS_CLUB: frozenset({14, 16}),
    CardBrand.DISCOVER: frozenset({16}),
    CardBrand.JCB: frozenset({16}),
    CardBrand.MASTERCARD: frozenset({16}),
    CardBrand.VISA: frozenset({13, 16, 19}),
    CardBrand.UNIONPAY: frozenset({16, 17, 18, 19}),
}

BrandClassifier = Callable[[str], CardBrand]


def normalize_number(card_number: str) -> str:
    """Strip the spaces and dashes card widgets insert between digit groups."""
    return card_number.replace(" ", "").replace("-", "")


def is_ascii_digits(value: str) -> bool:
    """True for a non-empty string of the digits 0-9 only."""
    return value.isascii() and value.isdecimal()


def classify_brand(card_number: str) -> CardBrand:
    """Return the most likely brand for a (possibly partial) card number."""
    digits = normalize_number(card_number)
    if not is_ascii_digits(digits):
        return CardBrand.UNKNOWN

    for brand, prefixes in BRAND_PREFIXES:
        if digits.startswith(prefixes):
            return brand
    return CardBrand.UNKNOWN
