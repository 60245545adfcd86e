"""
fpmine — Long-format order lines
================================

Order lines (one row per order/product pair) are pivoted into a sparse
one-hot frame with ``from_transactions`` and mined with several threads.
"""

import numpy as np
import pandas as pd

from fpmine import fpgrowth, from_transactions

rng = np.random.default_rng(0)
products = [f"product_{i:02d}" for i in range(40)]
popularity = np.clip(0.6 / np.arange(1, len(products) + 1) ** 0.7, 0.01, 0.6)

rows = []
for order_id in range(5_000):
    basket = rng.random(len(products)) < popularity
    rows.extend((order_id, products[i]) for i in np.flatnonzero(basket))
orders = pd.DataFrame(rows, columns=["order_id", "product"])

print(f"{len(orders):,} order lines across {orders['order_id'].nunique():,} orders")

ohe = from_transactions(orders, transaction_col="order_id", item_col="product", verbose=1)
freq = fpgrowth(ohe, min_support=0.05, use_colnames=True, n_jobs=-1, verbose=1)

print(f"Frequent itemsets: {len(freq):,}")
print(freq.sort_values("support", ascending=False).head(10).to_string(index=False))
