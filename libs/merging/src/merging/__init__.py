"""Merging library for cross-provider anime records.

This library decides for every per-provider anime record whether it
describes an anime already known under another provider:
- Title normalization and a partitioned candidate index
- Weighted multi-attribute matching probability
- Curated merge locks overriding the matching probability
- Batch orchestration with deferral of ambiguous records
"""

from .service import MergingService

__all__ = ["MergingService"]
