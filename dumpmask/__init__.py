# dumpmask/__init__.py
# Masking and wildcard-aware comparison of partial firmware dumps.
#
# ENTRY POINT:
#   python -m dumpmask.run_dumpmask {view,mask,compare} ...
#
# Programmatic use:
#   from dumpmask import DumpMaskConfig, view, mask, compare

from .version import TOOL_VERSION, REPORT_FORMAT_VERSION
from .config import DumpMaskConfig
from .operations import view, mask, mask_stream, compare

__version__ = TOOL_VERSION

__all__ = [
    # Version constants
    "TOOL_VERSION",
    "REPORT_FORMAT_VERSION",
    # Configuration
    "DumpMaskConfig",
    # Operations
    "view",
    "mask",
    "mask_stream",
    "compare",
]
