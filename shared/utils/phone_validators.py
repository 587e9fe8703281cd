"""
Contains phone number-related validation functions
"""

import phonenumbers

from shared.core.config import settings

PHONE_ERRORS: dict[str, str] = {
    "too_short": "Phone number must be at least 10 characters.",
    "invalid_format": "Invalid phone number format.",
    "invalid_length": "Phone number length is incorrect for the given country.",
}

MIN_PHONE_LENGTH = 10


class PhoneValidator:
    """
    Phone number validator backed by libphonenumber.

    Numbers without a ``+`` country prefix are parsed in
    ``settings.PHONE_DEFAULT_REGION``. Valid numbers are returned in E.164.
    """

    @staticmethod
    def validate(phone_number: str, region: str | None = None) -> str:
        """
        Args:
            phone_number (str): The phone number to validate
            region (str | None): ISO country code for local numbers

        Returns:
            str: The number in E.164 format

        Raises:
            ValueError: If the number fails validation
        """
        value = phone_number.strip()
        if len(value) < MIN_PHONE_LENGTH:
            raise ValueError(PHONE_ERRORS["too_short"])

        try:
            parsed = phonenumbers.parse(
                value, region or settings.PHONE_DEFAULT_REGION
            )
        except phonenumbers.NumberParseException as exc:
            raise ValueError(PHONE_ERRORS["invalid_format"]) from exc

        if not phonenumbers.is_possible_number(parsed):
            raise ValueError(PHONE_ERRORS["invalid_length"])

        return phonenumbers.format_number(
            parsed, phonenumbers.PhoneNumberFormat.E164
        )
