"""Field classification and optimization decisions."""

from protoprofile.analysis.classifier import FieldClassifier
from protoprofile.analysis.decider import OptimizationDecider
from protoprofile.analysis.types import FieldAnalysis, Optimization, Scale

__all__ = [
    "FieldAnalysis",
    "FieldClassifier",
    "Optimization",
    "OptimizationDecider",
    "Scale",
]
