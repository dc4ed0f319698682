"""
PySATL Stats
============

Probability distributions backed by in-house special functions, the
characteristic graph and parametric families that power them, and K-means
clustering.
"""

__author__ = "Leonid Elkin, Mikhail Mikhailov"
__copyright__ = "Copyright (c) 2025 PySATL project"
__license__ = "SPDX-License-Identifier: MIT"

from importlib.metadata import version

from .clustering import *
from .clustering import __all__ as _clustering_all
from .distributions import *
from .distributions import __all__ as _distr_all
from .families import *
from .families import __all__ as _family_all
from .random import *
from .random import __all__ as _random_all
from .special import *
from .special import __all__ as _special_all
from .types import *
from .types import __all__ as _types_all

__version__ = version("pysatl-stats")
__all__ = [
    "__version__",
    *_clustering_all,
    *_distr_all,
    *_family_all,
    *_random_all,
    *_special_all,
    *_types_all,
]

del _clustering_all
del _distr_all
del _family_all
del _random_all
del _special_all
del _types_all
