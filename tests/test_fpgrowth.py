"""One-hot DataFrame API tests: shared scenarios per input type, plus ported reference results."""

from __future__ import annotations

import functools
import unittest

import numpy as np
import pandas as pd
import pytest
from test_fpbase import (
    FPTestEdgeCases,
    FPTestErrors,
    FPTestTextbook,
    csr_input,
    dense_input,
    numpy_input,
    one_hot,
    sparse_input,
)

from fpmine import fpgrowth

sequential_algo = fpgrowth
threaded_algo = functools.partial(fpgrowth, n_jobs=2)


class TestTextbook_Dense(unittest.TestCase, FPTestTextbook):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestTextbook.setUp(self, sequential_algo, dense_input)


class TestTextbook_Sparse(unittest.TestCase, FPTestTextbook):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestTextbook.setUp(self, sequential_algo, sparse_input)


class TestTextbook_Numpy(unittest.TestCase, FPTestTextbook):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestTextbook.setUp(self, sequential_algo, numpy_input)


class TestTextbook_CSR(unittest.TestCase, FPTestTextbook):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestTextbook.setUp(self, sequential_algo, csr_input)


class TestTextbook_Threaded(unittest.TestCase, FPTestTextbook):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestTextbook.setUp(self, threaded_algo, sparse_input)


class TestEdgeCases_Sequential(unittest.TestCase, FPTestEdgeCases):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestEdgeCases.setUp(self, sequential_algo)


class TestEdgeCases_Threaded(unittest.TestCase, FPTestEdgeCases):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestEdgeCases.setUp(self, threaded_algo)


class TestErrors(unittest.TestCase, FPTestErrors):
    def setUp(self) -> None:  # type: ignore[override]
        FPTestErrors.setUp(self, sequential_algo)


# ---------------------------------------------------------------------------
# Apache Spark MLlib ported tests
# ---------------------------------------------------------------------------


def test_spark_mllib_fpgrowth_string() -> None:
    transactions = [
        "r z h k p".split(" "),
        "z y x w v u t s".split(" "),
        "s x o n r".split(" "),
        "x z y m t s q e".split(" "),
        ["z"],
        "x z y r q t p".split(" "),
    ]
    df = one_hot(transactions)

    res = fpgrowth(df, min_support=0.9, use_colnames=True)
    assert len(res) == 0

    res = fpgrowth(df, min_support=0.5, use_colnames=True)
    assert len(res) == 18

    freq_dict = {tuple(sorted(row["itemsets"])): row["support"] * len(df) for _, row in res.iterrows()}
    assert freq_dict[("z",)] == pytest.approx(5)
    assert freq_dict[("x",)] == pytest.approx(4)
    assert freq_dict[("t", "x", "y", "z")] == pytest.approx(3)

    assert len(fpgrowth(df, min_support=0.3, use_colnames=True)) == 54
    assert len(fpgrowth(df, min_support=0.1, use_colnames=True)) == 625


def test_spark_mllib_fpgrowth_int() -> None:
    transactions = [
        [1, 2, 3],
        [1, 2, 3, 4],
        [5, 4, 3, 2, 1],
        [6, 5, 4, 3, 2, 1],
        [2, 4],
        [1, 3],
        [1, 7],
    ]
    df = one_hot(transactions)  # type: ignore[arg-type]

    assert len(fpgrowth(df, min_support=0.9, use_colnames=True)) == 0

    res = fpgrowth(df, min_support=0.5, use_colnames=True)
    freq_dict = {tuple(sorted(row["itemsets"])): round(row["support"] * len(df)) for _, row in res.iterrows()}
    assert freq_dict == {
        (1,): 6,
        (2,): 5,
        (3,): 5,
        (4,): 4,
        (1, 2): 4,
        (1, 3): 5,
        (2, 3): 4,
        (2, 4): 4,
        (1, 2, 3): 4,
    }

    assert len(fpgrowth(df, min_support=0.3, use_colnames=True)) == 15
    assert len(fpgrowth(df, min_support=0.1, use_colnames=True)) == 65


def test_textbook_counts_per_threshold(textbook_transactions) -> None:
    df = one_hot(textbook_transactions)  # type: ignore[arg-type]
    expected = [(1, 88), (2, 43), (3, 15), (4, 15), (5, 11), (6, 7), (7, 4), (8, 4), (9, 0)]
    for min_count, n_patterns in expected:
        res = fpgrowth(df, min_support=min_count / len(df), use_colnames=True)
        assert len(res) == n_patterns, f"min_count={min_count}"


def test_polars_input() -> None:
    pl = pytest.importorskip("polars")
    df = pd.DataFrame({"a": [True, True, False, True], "b": [True, False, True, True], "c": [False, False, True, True]})
    res_pd = fpgrowth(df, min_support=0.5, use_colnames=True)
    res_pl = fpgrowth(pl.from_pandas(df), min_support=0.5, use_colnames=True)
    assert sorted(map(tuple, res_pd["itemsets"])) == sorted(map(tuple, res_pl["itemsets"]))


def test_pyarrow_table_input() -> None:
    pa = pytest.importorskip("pyarrow")
    df = pd.DataFrame({"a": [True, True, False], "b": [True, True, True]})
    res = fpgrowth(pa.Table.from_pandas(df), min_support=0.6, use_colnames=True)
    assert {tuple(sorted(i)) for i in res["itemsets"]} == {("a",), ("b",), ("a", "b")}


def test_column_names_length_mismatch() -> None:
    with pytest.raises(ValueError, match="column names"):
        fpgrowth(np.ones((2, 3), dtype=bool), column_names=["a", "b"], use_colnames=True)


def test_rejects_unknown_input_type() -> None:
    with pytest.raises(TypeError, match="Expected a pandas"):
        fpgrowth({"a": [1, 0]})


def test_verbose_prints_progress(capsys) -> None:
    df = pd.DataFrame({"a": [True, True], "b": [True, False]})
    fpgrowth(df, min_support=0.5, verbose=1)
    out = capsys.readouterr().out
    assert "Analyzing input data type" in out
    assert "Mining completed" in out


def test_rows_are_ordered_by_length() -> None:
    df = pd.DataFrame({"a": [True, True, True], "b": [True, True, False], "c": [True, False, False]})
    res = fpgrowth(df, min_support=0.3, use_colnames=True)
    lengths = [len(i) for i in res["itemsets"]]
    assert lengths == sorted(lengths)
