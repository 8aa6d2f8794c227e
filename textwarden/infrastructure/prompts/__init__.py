"""Prompt templates for remote issue detection"""

from .loader import PromptLoader, dialect_for, get_prompt_loader

__all__ = ["PromptLoader", "dialect_for", "get_prompt_loader"]
