"""Exclusion rules for deciding which files and folders are left out of a summary."""

from .base_rules import BaseExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .ignore_oracle import IgnoreOracle

__all__ = [
    "BaseExclusionRules",
    "GitIgnoreExclusionRules",
    "IgnoreOracle",
]
