"""
Ledger export.

Converts a projected ledger into a pandas DataFrame and CSV for download or
further analysis.
"""

from typing import Sequence

import pandas as pd

from retiresmart.models.ledger import LedgerRow

LEDGER_COLUMNS = [
    "year",
    "age",
    "openingBalance",
    "investments",
    "expenses",
    "milestones",
    "growth",
    "closingBalance",
    "isRetirement",
]


def ledger_to_dataframe(ledger: Sequence[LedgerRow]) -> pd.DataFrame:
    """Tabulate the ledger, one row per year, with camelCase column names."""
    records = [row.model_dump(by_alias=True) for row in ledger]
    return pd.DataFrame.from_records(records, columns=LEDGER_COLUMNS)


def ledger_to_csv(ledger: Sequence[LedgerRow], decimals: int = 2) -> str:
    """Render the ledger as CSV with money columns rounded to ``decimals``."""
    frame = ledger_to_dataframe(ledger)
    money = ["openingBalance", "investments", "expenses", "milestones", "growth", "closingBalance"]
    frame[money] = frame[money].round(decimals)
    return frame.to_csv(index=False)
