"""
Basic usage of snowflake-ids

This example demonstrates:
- The three construction forms
- Generating and decomposing identifiers
- Handling configuration errors and clock regression
"""

from snowflake_ids import ClockRegression, InvalidConfiguration, Snowflake
from snowflake_ids.kernel.layout import DEFAULT_CUSTOM_EPOCH
from snowflake_ids.kernel.time import TestClock


def example_1_construction():
    """Example 1: Explicit node id and epoch, node id only, fully derived"""
    print("\n=== Example 1: Construction ===\n")

    explicit = Snowflake(7, 1_700_000_000_000)
    node_only = Snowflake(7)
    derived = Snowflake()

    for generator in (explicit, node_only, derived):
        print(f"  {generator.describe()}")

    try:
        Snowflake(1024)
    except InvalidConfiguration as e:
        print(f"\n  Rejected: {e}")


def example_2_generate_and_parse():
    """Example 2: Generate ids and take them apart again"""
    print("\n=== Example 2: Generate and Parse ===\n")

    generator = Snowflake(42)
    for _ in range(3):
        snowflake_id = generator.next_id()
        parts = generator.parse(snowflake_id)
        print(
            f"  {snowflake_id}: node={parts.node_id} seq={parts.sequence} "
            f"created_at={parts.created_at.isoformat()}"
        )


def example_3_clock_regression():
    """Example 3: A clock that jumps backwards stops the generator"""
    print("\n=== Example 3: Clock Regression ===\n")

    clock = TestClock(DEFAULT_CUSTOM_EPOCH + 10_000)
    generator = Snowflake(1, clock=clock)
    generator.next_id()

    clock.advance_millis(-50)
    try:
        generator.next_id()
    except ClockRegression as e:
        print(f"  Refused: {e}")


if __name__ == "__main__":
    example_1_construction()
    example_2_generate_and_parse()
    example_3_clock_regression()
