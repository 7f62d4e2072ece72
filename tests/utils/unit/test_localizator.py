"""
Unit Tests: Localizator

Both language files must define the same keys, and money is formatted with
the configured currency symbol.
"""

import json

import pytest

from enums.bot_entity import BotEntity
from utils.localizator import L10N_DIR, Localizator


def load(lang: str) -> dict:
    with open(L10N_DIR / f"{lang}.json", encoding="UTF-8") as f:
        return json.load(f)


@pytest.mark.parametrize("section", ["admin", "user", "common"])
def test_languages_have_same_keys(section):
    assert set(load("es")[section]) == set(load("en")[section])


def test_default_language_from_config():
    assert Localizator.get_text(BotEntity.USER, "waiter_called") == "Un mesero va en camino"


def test_explicit_language():
    assert Localizator.get_text(BotEntity.USER, "checkout_step_review", lang="en") == "Review"


def test_missing_key_raises():
    with pytest.raises(KeyError):
        Localizator.get_text(BotEntity.USER, "does_not_exist")


@pytest.mark.parametrize("amount,expected", [
    (0, "$0.00"),
    (85.5, "$85.50"),
    (1250, "$1,250.00"),
])
def test_format_money(amount, expected):
    assert Localizator.format_money(amount) == expected
