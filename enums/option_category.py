from enum import Enum


class OptionCategory(str, Enum):
    CONDIMENT = "condiment"   # Sauces and extras, may carry a price
    SOY = "soy"               # Soy sauce style (spicy / regular)
    UTENSILS = "utensils"     # Fork or chopsticks
    SPECIAL = "special"       # Kitchen instructions like "no chili"
