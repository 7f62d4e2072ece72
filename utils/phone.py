import re

PHONE_DIGITS = 10

_NON_DIGITS = re.compile(r'\D')


def digits_only(phone: str | None) -> str:
    if not phone:
        return ""
    return _NON_DIGITS.sub("", phone)


def is_valid_phone(phone: str | None) -> bool:
    """
    Check a local phone number: exactly 10 digits once separators are removed.

    Examples:
        >>> is_valid_phone("55 1234 5678")
        True
        >>> is_valid_phone("(55) 1234-567")
        False
    """
    return len(digits_only(phone)) == PHONE_DIGITS


def format_phone(phone: str | None) -> str:
    """
    Format for display as "55 1234 5678"; anything that is not 10 digits
    is returned as digits only.
    """
    digits = digits_only(phone)
    if len(digits) != PHONE_DIGITS:
        return digits
    return f"{digits[:2]} {digits[2:6]} {digits[6:]}"
