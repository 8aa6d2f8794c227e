"""Text segmentation utilities"""

from .segmenter import TextSegmenter, split_text

__all__ = ["TextSegmenter", "split_text"]
