"""
fpmine — Polars DataFrame Input
===============================

fpmine accepts one-hot Polars DataFrames directly; the result is always a
pandas DataFrame with a pyarrow-backed ``itemsets`` column.

Requires: `pip install "fpmine[polars]"`
"""

import numpy as np
import polars as pl

from fpmine import fpgrowth

rng = np.random.default_rng(0)
n_rows, n_cols = 2_000, 30
products = [f"product_{i:03d}" for i in range(n_cols)]

support = np.clip(0.5 / np.arange(1, n_cols + 1, dtype=float) ** 0.5, 0.02, 0.5)
matrix = rng.random((n_rows, n_cols)) < support

df_pl = pl.DataFrame({p: matrix[:, i].tolist() for i, p in enumerate(products)})
print(f"Polars DataFrame: {df_pl.shape[0]:,} rows × {df_pl.shape[1]} columns")

freq = fpgrowth(df_pl, min_support=0.05, use_colnames=True, max_len=3)
print(f"Frequent itemsets: {len(freq):,}")
print(freq.sort_values("support", ascending=False).head(8).to_string(index=False))
