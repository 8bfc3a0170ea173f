# dumpmask/compare/__init__.py
# Wildcard-aware comparison of masked dumps.

from .comparator import Comparator, compare, resolve_effective_length
from .data_models.compare_spec import CompareSpec
from .data_models.dump_stream import DumpStream
from .data_models.mismatch_report import MismatchRecord, MismatchReport

__all__ = [
    "Comparator",
    "compare",
    "resolve_effective_length",
    "CompareSpec",
    "DumpStream",
    "MismatchRecord",
    "MismatchReport",
]
