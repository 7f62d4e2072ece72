import json
from pathlib import Path
from typing import Optional

import config
from enums.bot_entity import BotEntity

L10N_DIR = Path(__file__).resolve().parent.parent / "l10n"


class Localizator:

    @staticmethod
    def get_text(entity: BotEntity, key: str, lang: Optional[str] = None) -> str:
        """
        Get localized text for given entity and key.

        Args:
            entity: Entity type (ADMIN = staff, USER = customer, COMMON)
            key: Localization key
            lang: Optional language code (e.g., "es", "en").
                  If None, uses config.BOT_LANGUAGE (default).

        Returns:
            Localized text string

        Example:
            text = Localizator.get_text(BotEntity.USER, "waiter_called", lang="en")
        """
        language = lang if lang is not None else config.BOT_LANGUAGE
        localization_file = L10N_DIR / f"{language}.json"

        with open(localization_file, "r", encoding="UTF-8") as f:
            data = json.loads(f.read())
            if entity == BotEntity.ADMIN:
                return data["admin"][key]
            elif entity == BotEntity.USER:
                return data["user"][key]
            else:
                return data["common"][key]

    @staticmethod
    def get_currency_symbol() -> str:
        return config.CURRENCY_SYMBOL

    @staticmethod
    def format_money(amount: float) -> str:
        """
        Format a currency amount for display.

        Examples:
            >>> Localizator.format_money(1250)
            '$1,250.00'
        """
        return f"{Localizator.get_currency_symbol()}{amount:,.2f}"
