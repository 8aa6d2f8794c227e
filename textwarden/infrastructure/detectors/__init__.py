"""Issue detectors (remote model + local rules)"""

from .local_detector import LocalRuleDetector
from .remote_detector import RemoteDetector
from .response_parser import extract_issue_objects, parse_issues

__all__ = [
    "LocalRuleDetector",
    "RemoteDetector",
    "extract_issue_objects",
    "parse_issues",
]
