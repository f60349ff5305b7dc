"""Domain constants and enumerations for validation."""

from typing import Literal

ProductType = Literal["tshirt", "sweater"]
Material = Literal["light-cotton", "heavy-cotton"]
Color = Literal["black", "white", "green", "red", "pink", "yellow"]

DEFAULT_MATERIAL = "light-cotton"

BASE_CURRENCY = "CAD"
QUOTE_CURRENCIES = ("USD", "EUR")

# Surcharges in base currency units
TEXT_SURCHARGE = 5.00
TEXT_SURCHARGE_MIN_LENGTH = 8  # surcharge applies strictly above this length
IMAGE_SURCHARGE = 10.00

# Uploaded images are served from this path
UPLOADS_URL_PREFIX = "/uploads"
