"""
Tabular view of converted transactions.

``to_dataframe()`` turns a list of pydantic records (``Transaction`` or
any custom ``from_parsed`` target) into a pandas DataFrame, one row per
transaction in document order. Amounts are kept as ``Decimal`` (object
dtype) so no precision is lost on the way to analysis code.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import pandas as pd
from pydantic import BaseModel

from bank_statement_ingest.transaction import Transaction

logger = logging.getLogger(__name__)

TRANSACTION_COLUMNS = list(Transaction.model_fields)


def to_dataframe(transactions: Sequence[BaseModel]) -> pd.DataFrame:
    """Build a DataFrame from converted transactions.

    Args:
        transactions: Pydantic records, typically ``Transaction``.

    Returns:
        DataFrame with one column per model field. An empty input yields
        an empty frame with the ``Transaction`` columns.
    """
    if not transactions:
        return pd.DataFrame(columns=TRANSACTION_COLUMNS)

    records = [tx.model_dump() for tx in transactions]
    columns = list(type(transactions[0]).model_fields)
    df = pd.DataFrame.from_records(records, columns=columns)
    # Keep Decimal amounts as Python objects
    if "amount" in df.columns:
        df["amount"] = df["amount"].astype(object)
    logger.debug("Built DataFrame: %d rows x %d cols", len(df), len(df.columns))
    return df
