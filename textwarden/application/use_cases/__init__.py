"""Application use cases"""

from .analyze_text import AnalyzeTextInput, AnalyzeTextResult, AnalyzeTextUseCase

__all__ = ["AnalyzeTextInput", "AnalyzeTextResult", "AnalyzeTextUseCase"]
