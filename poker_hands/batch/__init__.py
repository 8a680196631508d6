"""Batched hand classification on torch tensors."""

from .gpu_classifier import (
    NUM_CATEGORIES,
    GPUHandClassifier,
    labels,
    validate_batch,
)

__all__ = [
    "NUM_CATEGORIES",
    "GPUHandClassifier",
    "labels",
    "validate_batch",
]
