from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import pandas as pd

    from ._compat import DataFrame


def fpgrowth(
    df: DataFrame | Any,
    min_support: float = 0.5,
    null_values: bool = False,
    use_colnames: bool = False,
    max_len: int | None = None,
    n_jobs: int = 1,
    verbose: int = 0,
    column_names: list[Any] | None = None,
) -> pd.DataFrame:
    """Find frequent itemsets in a one-hot encoded transaction matrix.

    Parameters
    ----------
    df : pandas.DataFrame, polars.DataFrame, pyarrow.Table, numpy.ndarray or scipy CSR matrix
        One row per transaction, one boolean / 0-1 column per item.
        Sparse pandas frames and CSR matrices are read without densifying.
    min_support : float, default=0.5
        Minimum support as a fraction of transactions, in ``(0, 1]``.
    null_values : bool, default=False
        Allow NaN in pandas input; NaN cells are treated as absent items.
    use_colnames : bool, default=False
        Return column names in ``itemsets`` instead of column indices.
    max_len : int | None, default=None
        Maximum itemset length.  ``None`` means no limit.
    n_jobs : int, default=1
        Worker threads for the top-level mining step (``-1``: one per CPU).
    verbose : int, default=0
        If > 0, print timestamped progress to standard output.
    column_names : list | None, default=None
        Labels to use for NumPy / SciPy input when ``use_colnames=True``.

    Returns
    -------
    pandas.DataFrame
        Columns ``support`` (fraction of transactions) and ``itemsets``.
        ``attrs["num_itemsets"]`` holds the number of transactions.

    Examples
    --------
    >>> import pandas as pd
    >>> df = pd.DataFrame({"bread": [True, True, False], "milk": [True, True, True]})
    >>> freq = fpgrowth(df, min_support=0.6, use_colnames=True)
    """
    if min_support <= 0.0:
        raise ValueError(
            "`min_support` must be a positive "
            "number within the interval `(0, 1]`. "
            "Got %s." % min_support
        )

    from ._core import dispatch

    return dispatch(
        df,
        min_support,
        null_values,
        use_colnames,
        max_len,
        n_jobs=n_jobs,
        column_names=column_names,
        verbose=verbose,
    )
