from .base import BaseApplier, BaseCalculator, StatelessTransformer
from .cleaning import CompleteCaseApplier, CompleteCaseCalculator, clean_rows
from .scaling import MinMaxScalerApplier, MinMaxScalerCalculator, normalize_rows

__all__ = [
    "BaseApplier",
    "BaseCalculator",
    "StatelessTransformer",
    "CompleteCaseApplier",
    "CompleteCaseCalculator",
    "clean_rows",
    "MinMaxScalerApplier",
    "MinMaxScalerCalculator",
    "normalize_rows",
]
