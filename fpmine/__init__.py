"""fpmine – FP-Growth frequent itemset mining for Python."""

from ._errors import InvalidInputError, MiningTimeoutError
from ._validation import valid_input_check
from .algorithm import FPGrowth, FPResult, find_frequent_patterns
from .fpgrowth import fpgrowth
from .transactions import from_transactions, to_transactions
from .tree import FPTree, HeaderEntry

__all__ = [
    "FPGrowth",
    "FPResult",
    "FPTree",
    "HeaderEntry",
    "find_frequent_patterns",
    "fpgrowth",
    "from_transactions",
    "to_transactions",
    "valid_input_check",
    "InvalidInputError",
    "MiningTimeoutError",
]
