"""
tabscope Quickstart Example.

This script demonstrates how to:
1. Load a dataset into an AnalysisSession.
2. Inspect the column profile.
3. Pick a target and features to get a quick performance estimate.
4. Build the chart data and the explanation text for one feature.
"""

import asyncio

import numpy as np
import pandas as pd

from tabscope import AnalysisSession
from tabscope.config import get_settings


def create_dummy_csv() -> str:
    """Create a dummy dataset for demonstration."""
    rng = np.random.default_rng(42)
    n = 200
    df = pd.DataFrame(
        {
            "age": rng.integers(18, 80, n),
            "income": rng.normal(50000, 15000, n).round(2),
            "city": rng.choice(["New York", "London", "Paris"], n),
        }
    )
    df["is_customer"] = np.where(df["income"] + rng.normal(0, 5000, n) > 50000, "yes", "no")
    # Add some missing values
    df.loc[0:10, "income"] = np.nan
    return df.to_csv(index=False)


async def main():
    settings = get_settings()
    settings.setup_logging()

    print("1. Loading data...")
    session = AnalysisSession.from_upload(create_dummy_csv(), "customers.csv", settings=settings)
    print(f"   {session.meta.row_count} rows, columns: {session.meta.columns}")

    print("\n2. Column profile:")
    for name in session.meta.columns:
        stats = session.meta.stats[name]
        print(
            f"   {name:<12} {stats.type.value:<12} missing={session.meta.missing_percentage(name):.1f}% "
            f"unique={stats.unique_count}"
        )

    print("\n3. Performance estimate (target: is_customer):")
    result = session.select("is_customer", ["age", "income"], random_state=42)
    print(f"   {result.model_name}: accuracy={result.accuracy:.2f}, AUC estimate={result.auc_estimate:.2f}")
    print(f"   trained on {result.train_rows} rows, tested on {result.test_rows}")

    print("\n   Performance estimate (target: income):")
    result = session.select("income", ["age"], random_state=42)
    print(f"   {result.model_name}: R²={result.accuracy:.2f}")

    session.select("is_customer", ["income", "age"], random_state=42)
    feature = session.default_display_feature()
    print(f"\n4. Distribution of '{feature}':")
    for bucket in session.histogram(feature):
        print(f"   {bucket.label:>22} | {'#' * (bucket.count // 2)}")

    print(f"\n   {len(session.relationship(feature))} points in the relationship chart")
    print(f"   {session.stats_context(feature)}")
    print(f"   {await session.explain(feature)}")


if __name__ == "__main__":
    asyncio.run(main())
