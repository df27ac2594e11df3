"""Utilities for turning profile statistics into a short prompt context."""

from ..profiling.schemas import DatasetMeta


def build_stats_context(meta: DatasetMeta, target: str, feature: str) -> str:
    """One-line statistics summary describing a target/feature pair."""
    target_stats = meta.stats[target]
    feature_stats = meta.stats[feature]
    mean = f"{feature_stats.mean:.2f}" if feature_stats.mean is not None else "N/A"
    return (
        f"Target is {target} ({target_stats.type.value}), "
        f"Feature is {feature} ({feature_stats.type.value}). "
        f"Mean of feature: {mean}."
    )


def build_prompt(target: str, feature: str, stats: str) -> str:
    return (
        f"In two or three sentences for a non-expert, explain how '{feature}' might relate to "
        f"'{target}' and what to look for in its histogram. Statistics: {stats}"
    )
