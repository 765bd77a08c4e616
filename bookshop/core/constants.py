# bookshop/core/constants.py

from typing import Literal

CLASS_LEVELS = (
    "Basic 1",
    "Basic 2",
    "Basic 3",
    "Basic 4",
    "Basic 5",
    "Basic 6",
)

ClassLevel = Literal["Basic 1", "Basic 2", "Basic 3", "Basic 4", "Basic 5", "Basic 6"]

Currency = Literal["GHS", "USD", "EUR"]

CURRENCY_SYMBOLS = {
    "GHS": "₵",
    "USD": "$",
    "EUR": "€",
}

# Largest value an INTEGER column holds on PostgreSQL
MAX_DB_INT = 2_147_483_647

# Numeric(10, 2)
MAX_PRICE = 100_000_000
