"""
tabscope configuration management

Named constants for every heuristic threshold used by the profiling and
modeling engine, a pydantic Settings object that lets them be tuned from the
environment, and the logging bootstrap.
"""

import os
import logging
from functools import lru_cache
from logging import Handler
from logging.handlers import RotatingFileHandler
from typing import Optional

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# === PROFILING ===
# A column is numeric when at least this share of its defined values are numbers.
NUMERIC_TYPE_THRESHOLD = 0.9
SAMPLE_SIZE = 5
HISTOGRAM_BINS = 10
RELATIONSHIP_SAMPLE_LIMIT = 300

# === MODELING ===
# A numeric target with more distinct values than this is treated as regression.
REGRESSION_UNIQUE_THRESHOLD = 10
MIN_CLEAN_ROWS = 10
TRAIN_FRACTION = 0.7
KNN_NEIGHBORS = 5
KNN_NORMALIZATION = "independent"  # independent | train
NB_VARIANCE_FLOOR = 0.0001
NB_DENSITY_FLOOR = 0.00001
# auc_estimate = min(AUC_PROXY_CAP, accuracy + AUC_PROXY_OFFSET); not a ROC-AUC.
AUC_PROXY_OFFSET = 0.05
AUC_PROXY_CAP = 0.99

INSUFFICIENT_DATA_MODEL_NAME = "Insufficient data"
NAIVE_BAYES_MODEL_NAME = "Naive Bayes (live analysis)"
KNN_MODEL_NAME = "KNN Regression (R²)"

# === EXPLANATIONS ===
EXPLANATION_FALLBACK = (
    "AI explanations are disabled in this build (no explanation service is configured)."
)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[str] = None,
    max_bytes: int = 10 * 1024 * 1024,
    backup_count: int = 5,
) -> None:
    """
    Configure root logging for applications embedding tabscope.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to a rotating log file (directory is created)
    """
    level = getattr(logging, log_level.upper(), logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove all existing handlers to prevent duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        try:
            file_handler: Handler = RotatingFileHandler(
                log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
                encoding="utf-8",
            )
            file_handler.setLevel(level)
            file_handler.setFormatter(
                logging.Formatter(
                    "%(asctime)s [%(levelname)8s] %(name)s: %(message)s "
                    "[%(filename)s:%(lineno)d in %(funcName)s()]"
                )
            )
            root_logger.addHandler(file_handler)
        except OSError as e:
            root_logger.warning(f"Could not setup file logging to {log_file}: {e}")

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    root_logger.addHandler(console_handler)

    for logger_name in ("httpx", "httpcore", "openpyxl"):
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    root_logger.info(f"Logging initialized. Level: {log_level}, file: {log_file or '-'}")


class Settings(BaseSettings):
    """
    Runtime settings, loaded from TABSCOPE_* environment variables or a .env file.
    Defaults mirror the module constants above.
    """

    model_config = SettingsConfigDict(
        env_prefix="TABSCOPE_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # === LOGGING ===
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    # === PROFILING ===
    NUMERIC_TYPE_THRESHOLD: float = NUMERIC_TYPE_THRESHOLD
    SAMPLE_SIZE: int = SAMPLE_SIZE
    HISTOGRAM_BINS: int = HISTOGRAM_BINS
    RELATIONSHIP_SAMPLE_LIMIT: int = RELATIONSHIP_SAMPLE_LIMIT

    # === MODELING ===
    REGRESSION_UNIQUE_THRESHOLD: int = REGRESSION_UNIQUE_THRESHOLD
    MIN_CLEAN_ROWS: int = MIN_CLEAN_ROWS
    TRAIN_FRACTION: float = TRAIN_FRACTION
    KNN_NEIGHBORS: int = KNN_NEIGHBORS
    KNN_NORMALIZATION: str = KNN_NORMALIZATION
    NB_VARIANCE_FLOOR: float = NB_VARIANCE_FLOOR
    NB_DENSITY_FLOOR: float = NB_DENSITY_FLOOR
    AUC_PROXY_OFFSET: float = AUC_PROXY_OFFSET
    AUC_PROXY_CAP: float = AUC_PROXY_CAP

    # === EXPLANATION SERVICE ===
    EXPLANATION_API_URL: Optional[str] = None
    EXPLANATION_API_KEY: Optional[str] = None
    EXPLANATION_MODEL: str = "gpt-4o-mini"
    EXPLANATION_TIMEOUT: float = 15.0
    EXPLANATION_MAX_TOKENS: int = 300
    EXPLANATION_FALLBACK: str = EXPLANATION_FALLBACK

    @field_validator("NUMERIC_TYPE_THRESHOLD")
    @classmethod
    def validate_numeric_threshold(cls, v):
        if not 0 <= v <= 1:
            raise ValueError("NUMERIC_TYPE_THRESHOLD must be between 0 and 1")
        return v

    @field_validator("TRAIN_FRACTION")
    @classmethod
    def validate_train_fraction(cls, v):
        if not 0 < v < 1:
            raise ValueError("TRAIN_FRACTION must be strictly between 0 and 1")
        return v

    @field_validator("HISTOGRAM_BINS", "KNN_NEIGHBORS", "SAMPLE_SIZE", "MIN_CLEAN_ROWS")
    @classmethod
    def validate_positive(cls, v):
        if v < 1:
            raise ValueError("must be a positive integer")
        return v

    @field_validator("AUC_PROXY_OFFSET", "AUC_PROXY_CAP")
    @classmethod
    def validate_auc_proxy(cls, v):
        # The estimate is reported as a probability-like score
        if not 0 <= v <= 1:
            raise ValueError("AUC proxy offset and cap must be between 0 and 1")
        return v

    @field_validator("KNN_NORMALIZATION")
    @classmethod
    def validate_normalization(cls, v):
        v = v.lower()
        if v not in ("independent", "train"):
            raise ValueError("KNN_NORMALIZATION must be 'independent' or 'train'")
        return v

    @property
    def explanation_configured(self) -> bool:
        return bool(self.EXPLANATION_API_URL)

    def setup_logging(self) -> None:
        """Initialize application logging."""
        setup_logging(self.LOG_LEVEL, self.LOG_FILE)


@lru_cache()
def get_settings() -> Settings:
    """
    Get settings from the environment.
    Uses lru_cache to avoid re-reading the environment on every call.
    """
    return Settings()
