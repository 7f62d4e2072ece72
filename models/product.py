# products come from the menu catalog (spreadsheet or POS database) and are
# only referenced here; the storefront never writes them back
from pydantic import BaseModel, ConfigDict, field_validator

from enums.option_category import OptionCategory


class ProductDTO(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    name: str
    price: float
    category: str | None = None


class CustomizationOptionDTO(BaseModel):
    """Single per-unit selection (e.g. "Salsa Chipotle", "Palillos")."""
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    category: OptionCategory
    price: float = 0.0


class CustomizationDTO(BaseModel):
    """
    Ordered customization selections for one cart line.

    Two customizations are equal when they hold the same selections in the
    same order and the same note; blank notes are normalized to None so that
    "" and None describe the same line.
    """
    model_config = ConfigDict(frozen=True)

    selections: tuple[CustomizationOptionDTO, ...] = ()
    note: str | None = None

    @field_validator("note", mode="before")
    @classmethod
    def normalize_note(cls, value):
        if value is None:
            return None
        value = str(value).strip()
        return value or None

    @property
    def extra_price(self) -> float:
        return sum((option.price for option in self.selections), 0.0)

    def by_category(self, category: OptionCategory) -> list[CustomizationOptionDTO]:
        return [option for option in self.selections if option.category == category]

    def summary(self) -> str:
        """
        Human-readable one-line summary.

        Examples:
            "Salsa Chipotle, Palillos"
            "Con Picante; sin wasabi"
        """
        parts = ", ".join(option.name for option in self.selections)
        if self.note:
            return f"{parts}; {self.note}" if parts else self.note
        return parts
