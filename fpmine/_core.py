from __future__ import annotations

import math
import time
import typing
from typing import TYPE_CHECKING, Any

from ._compat import is_polars, to_dataframe
from .algorithm import FPGrowth

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl

    from ._compat import DataFrame


def min_count(min_support: float, n_rows: int) -> int:
    """Turn a support fraction into a transaction count (at least 1)."""
    # Rounding first keeps e.g. (2 / 11) * 11 from ceiling to 3.
    return max(1, math.ceil(round(min_support * n_rows, 9)))


def build_result(
    itemsets: list[list[Any]],
    counts: list[int],
    n_rows: int,
    col_names: list | Any | None = None,
) -> pd.DataFrame:
    """Assemble a ``support`` / ``itemsets`` DataFrame.

    With *col_names*, itemsets hold column indices that are mapped to names
    with an Arrow ``take``.  Rows are ordered by itemset length, then by
    itemset.
    """
    import numpy as np
    import pandas as pd
    import pyarrow as pa

    if not itemsets:
        empty = pd.DataFrame(columns=["support", "itemsets"])  # type: ignore[arg-type]
        empty.attrs["num_itemsets"] = n_rows
        return empty

    order = sorted(range(len(itemsets)), key=lambda i: (len(itemsets[i]), itemsets[i]))
    itemsets = [itemsets[i] for i in order]
    supports = np.asarray([counts[i] for i in order], dtype=float) / n_rows

    if col_names is not None:
        col_array = pa.array(list(col_names))
        offsets = np.cumsum([0] + [len(iset) for iset in itemsets])
        flat = [idx for iset in itemsets for idx in iset]
        items_pa = col_array.take(pa.array(flat, type=pa.int32()))
        list_arr = pa.ListArray.from_arrays(pa.array(offsets, type=pa.int32()), items_pa)
        column: Any = pd.Series(list_arr, dtype=pd.ArrowDtype(pa.list_(col_array.type)))
    else:
        try:
            list_arr = pa.array(itemsets)
            column = pd.Series(list_arr, dtype=pd.ArrowDtype(list_arr.type))
        except (pa.ArrowInvalid, pa.ArrowTypeError):
            # Items Arrow cannot type (mixed or custom objects) stay as Python lists.
            column = pd.Series(itemsets, dtype=object)

    result = pd.DataFrame({"support": supports, "itemsets": column})
    result.attrs["num_itemsets"] = n_rows
    return typing.cast("pd.DataFrame", result)


def _csr_rows(indptr: np.ndarray, indices: np.ndarray) -> list[list[int]]:
    return [indices[indptr[i] : indptr[i + 1]].tolist() for i in range(len(indptr) - 1)]


def _dense_rows(data: np.ndarray) -> list[list[int]]:
    import numpy as np

    return [np.flatnonzero(row).tolist() for row in data]


def _rows_from_pandas(df: pd.DataFrame, null_values: bool, verbose: int) -> list[list[int]]:
    import numpy as np

    from ._validation import valid_input_check

    valid_input_check(df, null_values)

    if hasattr(df, "sparse"):
        if verbose:
            print(f"[{time.strftime('%X')}] Converting Pandas Sparse DataFrame to CSR array...")
        csr = df.sparse.to_coo().tocsr()
        csr.eliminate_zeros()
        csr.sort_indices()
        return _csr_rows(np.asarray(csr.indptr), np.asarray(csr.indices))

    if verbose:
        print(f"[{time.strftime('%X')}] Converting dense DataFrame to uint8 array...")
    if null_values:
        df = df.fillna(0)
    data = np.ascontiguousarray(df.to_numpy(), dtype=np.uint8)
    return _dense_rows(data)


def to_rows(
    df: DataFrame | Any,
    null_values: bool = False,
    verbose: int = 0,
) -> tuple[list[list[int]], list[Any]]:
    """Turn a one-hot input into per-row lists of column indices plus the column labels."""
    import numpy as np

    df = to_dataframe(df)
    t = type(df).__name__

    if is_polars(df):
        pl_df = typing.cast("pl.DataFrame", df)
        if verbose:
            print(f"[{time.strftime('%X')}] Converting Polars DataFrame to uint8 array...")
        data = np.ascontiguousarray(pl_df.to_numpy(), dtype=np.uint8)
        return _dense_rows(data), list(pl_df.columns)

    if t in ("csr_matrix", "csr_array"):
        csr: Any = df
        if verbose:
            print(f"[{time.strftime('%X')}] Extracting CSR arrays from SciPy matrix...")
        csr.eliminate_zeros()
        csr.sort_indices()
        n_cols = csr.shape[1]
        return _csr_rows(np.asarray(csr.indptr), np.asarray(csr.indices)), list(range(n_cols))

    if t == "ndarray":
        df_nd = typing.cast("np.ndarray", df)
        if df_nd.ndim != 2:
            raise ValueError(f"Expected a 2-D one-hot array, got {df_nd.ndim} dimension(s).")
        return _dense_rows(np.asarray(df_nd)), list(range(df_nd.shape[1]))

    import pandas as pd

    if not isinstance(df, pd.DataFrame):
        raise TypeError(
            f"Expected a pandas/Polars DataFrame, PyArrow Table, NumPy array or SciPy CSR matrix, got {type(df)}"
        )
    return _rows_from_pandas(df, null_values, verbose), list(df.columns)


def dispatch(
    df: DataFrame | Any,
    min_support: float,
    null_values: bool,
    use_colnames: bool,
    max_len: int | None,
    n_jobs: int = 1,
    column_names: list[Any] | None = None,
    verbose: int = 0,
) -> pd.DataFrame:
    t0 = 0.0
    if verbose:
        print(f"[{time.strftime('%X')}] Analyzing input data type...")
        t0 = time.perf_counter()

    rows, labels = to_rows(df, null_values, verbose)
    if column_names is not None:
        if len(column_names) != len(labels):
            raise ValueError(f"Got {len(column_names)} column names for {len(labels)} columns.")
        labels = list(column_names)

    n_rows = len(rows)
    if verbose:
        t1 = time.perf_counter()
        print(f"[{time.strftime('%X')}] Done in {t1 - t0:.2f}s. Mining {n_rows:,} transactions...")
        t0 = t1

    result = FPGrowth(
        rows,
        min_count(min_support, n_rows),
        max_len=max_len,
        n_jobs=n_jobs,
    ).find_frequent_patterns()

    if verbose:
        t1 = time.perf_counter()
        print(
            f"[{time.strftime('%X')}] Mining completed in {t1 - t0:.2f}s "
            f"({len(result):,} itemsets). Assembling DataFrame..."
        )

    itemsets = [sorted(itemset) for itemset in result.frequent_patterns]
    counts = list(result.frequent_patterns.values())
    return build_result(itemsets, counts, n_rows, labels if use_colnames else None)
