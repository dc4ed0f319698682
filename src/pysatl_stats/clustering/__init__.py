"""
Clustering
==========

K-means clustering of numpy observation matrices.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from .kmeans import DEFAULT_MAX_ITERATIONS, ClusteringResult, KMeans

__all__ = [
    "DEFAULT_MAX_ITERATIONS",
    "ClusteringResult",
    "KMeans",
]
