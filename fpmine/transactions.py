"""Conversions between transaction lists, long-format frames and one-hot frames."""

from __future__ import annotations

import time
from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from ._compat import is_polars, to_dataframe

if TYPE_CHECKING:
    import pandas as pd

    from ._compat import DataFrame


def from_transactions(
    data: DataFrame | Sequence[Sequence[Any]] | Any,
    transaction_col: str | None = None,
    item_col: str | None = None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> Any:
    """Convert transactions to a one-hot boolean matrix.

    The return type mirrors the input type:

    - **Polars** ``DataFrame`` → **Polars** ``DataFrame``
    - **Pandas** ``DataFrame`` → **Pandas** ``DataFrame`` (sparse, bool)
    - **PyArrow** ``Table``    → **Pandas** ``DataFrame``
    - ``list[list[...]]``      → **Pandas** ``DataFrame`` (sparse, bool)

    Parameters
    ----------
    data
        Either a long-format DataFrame with one column identifying the
        transaction and one holding the item, or a list of lists where each
        inner list holds the items of one transaction.
    transaction_col
        Name of the transaction-id column.  Defaults to the first column.
        Ignored for list-of-lists input.
    item_col
        Name of the item column.  Defaults to the second column.  Ignored
        for list-of-lists input.
    min_item_count
        Minimum number of occurrences for an item to get a column.
    verbose
        If > 0, print timestamped progress.

    Returns
    -------
    DataFrame
        A boolean frame ready for :func:`fpmine.fpgrowth`.  Column names are
        the string form of the unique items.

    Examples
    --------
    >>> ohe = from_transactions([["bread", "milk"], ["bread", "eggs"]])
    >>> list(ohe.columns)
    ['bread', 'eggs', 'milk']
    """
    data = to_dataframe(data)

    if isinstance(data, (list, tuple)):
        return _from_list(data, min_item_count=min_item_count, verbose=verbose)

    import pandas as pd

    if is_polars(data):
        import polars as pl

        result_pd = _from_dataframe(
            data.to_pandas(), transaction_col, item_col, min_item_count=min_item_count, verbose=verbose
        )
        return pl.from_pandas(result_pd.sparse.to_dense())

    if isinstance(data, pd.DataFrame):
        return _from_dataframe(data, transaction_col, item_col, min_item_count=min_item_count, verbose=verbose)

    raise TypeError(f"Expected a Pandas/Polars DataFrame, PyArrow Table or list of lists, got {type(data)}")


def to_transactions(df: DataFrame | Any, null_values: bool = False) -> list[list[Any]]:
    """Turn a one-hot matrix back into one list of column labels per row.

    NumPy and SciPy inputs have no labels, so their rows hold column indices.
    """
    from ._core import to_rows

    rows, labels = to_rows(df, null_values=null_values)
    return [[labels[idx] for idx in row] for row in rows]


def _one_hot_frame(
    rows: Sequence[int] | Any,
    cols: Sequence[int] | Any,
    n_rows: int,
    labels: Sequence[Any],
) -> pd.DataFrame:
    """Sparse boolean frame with a ``True`` at every ``(rows[k], cols[k])``."""
    import numpy as np
    import pandas as pd
    from scipy import sparse as sp

    rows = np.asarray(rows, dtype=np.int64)
    cols = np.asarray(cols, dtype=np.int64)
    matrix = sp.csr_matrix(
        (np.ones(len(rows), dtype=np.int8), (rows, cols)),
        shape=(n_rows, len(labels)),
    )
    # Repeated (row, column) pairs were summed into the same cell.
    matrix.data[:] = 1
    return pd.DataFrame.sparse.from_spmatrix(matrix, columns=[str(label) for label in labels]).astype(
        pd.SparseDtype("bool", fill_value=False)
    )


def _from_list(
    transactions: Sequence[Sequence[Any]],
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    t0 = time.perf_counter()
    baskets = [set(txn) for txn in transactions]
    counts = Counter(item for basket in baskets for item in basket)
    # Numbers before strings so mixed baskets still sort.
    labels = sorted(
        (item for item, count in counts.items() if count >= min_item_count),
        key=lambda item: (isinstance(item, str), item),
    )
    column_of = {item: col for col, item in enumerate(labels)}
    if verbose:
        print(f"[{time.strftime('%X')}] {len(baskets):,} baskets, {len(labels):,} items kept.")

    iterator: Any = enumerate(baskets)
    if verbose:
        from ._dependencies import import_optional_dependency

        tqdm_auto = import_optional_dependency("tqdm.auto", errors="ignore")
        if tqdm_auto is not None:
            iterator = tqdm_auto.tqdm(iterator, total=len(baskets), desc="Baskets")

    rows: list[int] = []
    cols: list[int] = []
    for row, basket in iterator:
        for item in basket:
            col = column_of.get(item)
            if col is not None:
                rows.append(row)
                cols.append(col)

    frame = _one_hot_frame(rows, cols, len(baskets), labels)
    if verbose:
        print(f"[{time.strftime('%X')}] One-hot frame {frame.shape} built in {time.perf_counter() - t0:.2f}s.")
    return frame


def _from_dataframe(
    df: pd.DataFrame,
    transaction_col: str | None,
    item_col: str | None,
    min_item_count: int = 1,
    verbose: int = 0,
) -> pd.DataFrame:
    import pandas as pd

    t0 = time.perf_counter()
    columns = list(df.columns)
    if len(columns) < 2:
        raise ValueError(
            f"DataFrame must have at least 2 columns (transaction id + item), got {len(columns)}: {columns}"
        )

    txn_col = transaction_col or columns[0]
    itm_col = item_col or columns[1]
    for role, name in (("Transaction", txn_col), ("Item", itm_col)):
        if name not in df.columns:
            raise ValueError(f"{role} column '{name}' not found. Available columns: {columns}")

    # One line per (transaction, item) pair, so an item counts once per transaction.
    pairs = df[[txn_col, itm_col]].drop_duplicates()
    if min_item_count > 1:
        occurrences = pairs[itm_col].map(pairs[itm_col].value_counts())
        pairs = pairs.loc[occurrences >= min_item_count]

    rows, _ = pd.factorize(pairs[txn_col], sort=False)
    cols, labels = pd.factorize(pairs[itm_col], sort=True)
    n_rows = int(rows.max()) + 1 if len(rows) else 0

    frame = _one_hot_frame(rows, cols, n_rows, list(labels))
    if verbose:
        print(
            f"[{time.strftime('%X')}] {len(pairs):,} order lines pivoted to {frame.shape} "
            f"in {time.perf_counter() - t0:.2f}s."
        )
    return frame
