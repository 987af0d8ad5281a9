"""DeepSigma quantitative math toolbox."""

from . import linear_algebra, optimization, periodicity, randomization, statistics
from .randomization import EmptyCollectionError, InvalidWeightError, WeightedItem, WeightedRandom

__all__ = [
    "linear_algebra",
    "optimization",
    "periodicity",
    "randomization",
    "statistics",
    "EmptyCollectionError",
    "InvalidWeightError",
    "WeightedItem",
    "WeightedRandom",
]
__version__ = "0.1.0"
