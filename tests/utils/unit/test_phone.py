import pytest

from utils.phone import digits_only, format_phone, is_valid_phone


@pytest.mark.parametrize("phone,expected", [
    ("5512345678", True),
    ("55 1234 5678", True),
    ("(55) 1234-5678", True),
    ("+52 55 1234 5678", False),
    ("551234567", False),
    ("", False),
    (None, False),
])
def test_is_valid_phone(phone, expected):
    assert is_valid_phone(phone) is expected


def test_digits_only():
    assert digits_only("(55) 1234-5678") == "5512345678"
    assert digits_only(None) == ""


def test_format_phone():
    assert format_phone("5512345678") == "55 1234 5678"
    assert format_phone("12-34") == "1234"
