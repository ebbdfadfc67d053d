# numlpy/__init__.py
"""
numlpy: a small supervised-learning engine in pure Python (numpy based).

Exports:
    - Learner, learn, learn_all, learn_frame, best, LearningModel
    - KNNGenerator, LinearRegressionGenerator, LogisticRegressionGenerator
    - Descriptor, Property, StringProperty
    - impurity measures, distance/similarity metrics, kernels and linkers
    - cost functions, regularizers and gradient_descent
"""
from loguru import logger

from ._logging import disable_logging, enable_logging
from .descriptor import Descriptor, Property, StringProperty
from .exceptions import DimensionMismatchError, InvalidConfigurationError
from .functions import Ident, Logistic, Tanh
from .information import ClassificationError, Entropy, Gini, Impurity, ImpurityResult, Range, segment
from .kernels import Kernel, PolyKernel, RBFKernel
from .knn import KNNGenerator, KNNModel
from .learner import Learner, LearningModel, best, learn, learn_all, learn_frame, split_indices
from .linkers import AverageLinker, CentroidLinker, CompleteLinker, Linker, SingleLinker
from .metrics import (
    CosineDistance,
    Distance,
    EuclideanDistance,
    EuclideanSimilarity,
    HammingDistance,
    PearsonCorrelation,
    Similarity,
    TanimotoCoefficient,
)
from .optimization import (
    CostFunction,
    L2Regularizer,
    LinearCostFunction,
    LogisticCostFunction,
    Regularizer,
    gradient_descent,
)
from .regression import (
    LinearRegressionGenerator,
    LinearRegressionModel,
    LogisticRegressionGenerator,
    LogisticRegressionModel,
)

logger.disable("numlpy")

__all__ = [
    "Learner", "LearningModel", "best", "learn", "learn_all", "learn_frame", "split_indices",
    "KNNGenerator", "KNNModel",
    "LinearRegressionGenerator", "LinearRegressionModel",
    "LogisticRegressionGenerator", "LogisticRegressionModel",
    "Descriptor", "Property", "StringProperty",
    "Impurity", "ImpurityResult", "ClassificationError", "Entropy", "Gini", "Range", "segment",
    "Distance", "Similarity", "CosineDistance", "EuclideanDistance", "HammingDistance",
    "EuclideanSimilarity", "PearsonCorrelation", "TanimotoCoefficient",
    "Kernel", "PolyKernel", "RBFKernel",
    "Linker", "SingleLinker", "CompleteLinker", "AverageLinker", "CentroidLinker",
    "Ident", "Logistic", "Tanh",
    "CostFunction", "LinearCostFunction", "LogisticCostFunction",
    "Regularizer", "L2Regularizer", "gradient_descent",
    "InvalidConfigurationError", "DimensionMismatchError",
    "enable_logging", "disable_logging",
]
__version__ = "0.1.0"
