"""
Traditional denoising methods module.

This package contains classical mean filters for salt-and-pepper noise removal.
Includes both CPU and GPU-accelerated versions.
"""

from .mean_filters import (
    DEFAULT_RADIUS,
    DEFAULT_Q,
    MeanMethod,
    arithmetic_mean,
    harmonic_mean,
    geometric_mean,
    contraharmonic_mean,
    restore_salt_pepper,
)

from .mean_filters_gpu import (
    restore_salt_pepper_gpu,
)

__all__ = [
    "DEFAULT_RADIUS",
    "DEFAULT_Q",
    "MeanMethod",
    "arithmetic_mean",
    "harmonic_mean",
    "geometric_mean",
    "contraharmonic_mean",
    "restore_salt_pepper",
    # GPU versions
    "restore_salt_pepper_gpu",
]
