from __future__ import annotations

from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    import numpy as np
    import pandas as pd
    import polars as pl
    import pyarrow as pa
    from scipy.sparse import csr_matrix

    #: Union of the one-hot input types accepted by :func:`fpmine.fpgrowth`:
    #:
    #: * ``pandas.DataFrame`` – including sparse-backed frames
    #: * ``polars.DataFrame``
    #: * ``numpy.ndarray`` – 2-D boolean / 0-1 matrix
    #: * ``scipy.sparse.csr_matrix``
    #: * ``pyarrow.Table`` – converted to pandas
    DataFrame = Union[pd.DataFrame, pl.DataFrame, np.ndarray, csr_matrix, pa.Table]  # noqa: UP007


def module_of(data: Any) -> str:
    return getattr(type(data), "__module__", "") or ""


def is_polars(data: Any) -> bool:
    return type(data).__name__ == "DataFrame" and module_of(data).startswith("polars")


def to_dataframe(data: Any) -> Any:
    """Coerce PyArrow tables to pandas; return everything else unchanged."""
    if type(data).__name__ == "Table" and module_of(data).startswith("pyarrow"):
        return data.to_pandas()
    return data
