"""Card details as reported by the card input widget.

``CardDetails`` carries the raw card data plus the checks the widget uses to
decide whether a card is complete: number length and checksum, expiry date
and CVC.
"""

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field

from cardform.form.brands import (
    VALID_LENGTHS,
    CardBrand,
    classify_brand,
    is_ascii_digits,
    normalize_number,
)


def luhn_checksum_valid(digits: str) -> bool:
    """Check an ASCII digit string with the Luhn algorithm."""
    total = 0
    for index, char in enumerate(reversed(digits)):
        digit = int(char)
        if index % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


class CardDetails(BaseModel):
    """Card data entered in the card widget.

    The widget does not collect the cardholder name or postal code; the save
    orchestrator fills ``name`` and ``address_zip`` from the form before
    tokenizing.
    """

    model_config = ConfigDict(frozen=True)

    number: str = Field(default="", description="Card number as typed")
    exp_month: int | None = Field(default=None, description="Expiry month (1-12)")
    exp_year: int | None = Field(default=None, description="Expiry year (2 or 4 digits)")
    cvc: str = Field(default="", description="Card verification code")
    name: str | None = Field(default=None, description="Cardholder name")
    address_zip: str | None = Field(default=None, description="Billing postal code")

    @property
    def brand(self) -> CardBrand:
        return classify_brand(self.number)

    def validate_number(self) -> bool:
        """Number has a known brand, a length valid for it and a good checksum."""
        digits = normalize_number(self.number)
        if not is_ascii_digits(digits):
            return False

        lengths = VALID_LENGTHS.get(self.brand)
        if lengths is None or len(digits) not in lengths:
            return False
        return luhn_checksum_valid(digits)

    def validate_expiry_date(self, now: datetime | None = None) -> bool:
        """Expiry month/year are well formed and not in the past."""
        if self.exp_month is None or self.exp_year is None:
            return False
        if not 1 <= self.exp_month <= 12:
            return False

        year = self.exp_year + 2000 if self.exp_year < 100 else self.exp_year
        now = now or datetime.now(UTC)
        if year != now.year:
            return year > now.year
        return self.exp_month >= now.month

    def validate_cvc(self) -> bool:
        """CVC is four digits for American Express and three for other known brands.

        While the brand is still unknown either length is accepted.
        """
        cvc = self.cvc.strip()
        if not is_ascii_digits(cvc):
            return False

        brand = self.brand
        if brand == CardBrand.UNKNOWN:
            return len(cvc) in (3, 4)
        expected = 4 if brand == CardBrand.AMERICAN_EXPRESS else 3
        return len(cvc) == expected
