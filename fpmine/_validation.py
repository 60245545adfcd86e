"""Checks for one-hot encoded transaction frames."""

from __future__ import annotations

import warnings

import numpy as np
import pandas as pd


def valid_input_check(df: pd.DataFrame, null_values: bool = False) -> None:
    """Validate a one-hot / boolean DataFrame before it is turned into transactions.

    Parameters
    ----------
    df:
        Input DataFrame.  Allowed values: 0/1 or True/False (and NaN if
        ``null_values=True``).
    null_values:
        Whether NaN values are allowed in *df*.
    """
    if df is None or df.size == 0:
        return

    if hasattr(df, "sparse"):
        if not isinstance(df.columns[0], str) and df.columns[0] != 0:
            raise ValueError(
                "Due to current limitations in Pandas, "
                "if the sparse format has integer column names,"
                "names, please make sure they either start "
                "with `0` or cast them as string column names: "
                "`df.columns = [str(i) for i in df.columns`]."
            )

    if null_values:
        all_bools = bool(
            df.apply(lambda col: col.apply(lambda x: pd.isna(x) or isinstance(x, (bool, np.bool_)))).all().all()
        )
    else:
        all_bools = bool(df.dtypes.apply(pd.api.types.is_bool_dtype).all())

    if all_bools:
        return

    warnings.warn(
        "DataFrames with non-bool types result in worse computational "
        "performance and their support might be discontinued in the future. "
        "Please use a DataFrame with bool type",
        DeprecationWarning,
        stacklevel=3,
    )

    has_nans = bool(pd.isna(df).any().any())
    if not null_values and has_nans:
        raise ValueError("NaN values are not permitted in the DataFrame when null_values=False.")

    if hasattr(df, "sparse"):
        values = df.sparse.to_coo().tocoo().data
    else:
        values = df.to_numpy(dtype=float, na_value=np.nan)

    bad = (values != 1) & (values != 0)
    if null_values:
        bad &= ~np.isnan(values)
    idxs = np.where(bad)

    if len(idxs[0]) > 0:
        val = values[tuple(loc[0] for loc in idxs)]
        allowed = "True, False, 0, 1, NaN" if null_values else "True, False, 0, 1"
        raise ValueError(f"The allowed values for a DataFrame are {allowed}. Found value {val}")
