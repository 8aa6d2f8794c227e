"""Application layer: analysis orchestration"""

from .aggregator import offset_and_merge
from .analysis_context import AnalysisContext
from .dictionary_filter import apply_dictionary, normalize_dictionary

__all__ = [
    "AnalysisContext",
    "apply_dictionary",
    "normalize_dictionary",
    "offset_and_merge",
]
