"""
fpmine — Getting Started
========================

The simplest possible example: mine frequent itemsets from plain Python
transactions, then from a one-hot encoded pandas DataFrame.
"""

import pandas as pd

from fpmine import FPGrowth, fpgrowth

# ── 1. Plain transactions ───────────────────────────────────────────────────
transactions = [
    ["e", "c", "a", "b", "f", "h"],
    ["a", "c", "g"],
    ["e"],
    ["e", "c", "a", "g", "d"],
    ["a", "c", "e", "g"],
    ["e"],
    ["a", "c", "e", "b", "f"],
    ["a", "c", "d"],
    ["g", "c", "e", "a"],
    ["a", "c", "e", "g"],
    ["i"],
]

result = FPGrowth(transactions, minimum_support=2).find_frequent_patterns()
print(f"The number of results: {result.frequent_patterns_num()}")
for itemset, support in sorted(result.items(), key=lambda kv: (-kv[1], sorted(kv[0]))):
    print(sorted(itemset), support)
print()

# ── 2. One-hot DataFrame ────────────────────────────────────────────────────
data = {
    "bread": [1, 1, 0, 1, 1],
    "butter": [1, 0, 1, 1, 0],
    "milk": [1, 1, 1, 0, 1],
    "eggs": [0, 1, 1, 0, 1],
    "cheese": [0, 0, 1, 0, 0],
}
df = pd.DataFrame(data).astype(bool)

freq = fpgrowth(df, min_support=0.4, use_colnames=True)
print("Frequent itemsets (min_support=0.4):")
print(freq.sort_values("support", ascending=False).to_string(index=False))
