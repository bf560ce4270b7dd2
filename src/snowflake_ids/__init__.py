"""
snowflake-ids - Coordination-free 64-bit identifiers

Mints unique, roughly time-ordered identifiers locally at high rate. Each
generator needs only a distinct node id.

Fun fact: The name comes from the idea that no two snowflakes are alike -
and, unlike real ones, these can be sorted by when they fell.
"""

from snowflake_ids.generator import Snowflake, SnowflakeParts
from snowflake_ids.kernel.errors import ClockRegression, InvalidConfiguration, SnowflakeError

__version__ = "0.1.0"
__all__ = [
    "Snowflake",
    "SnowflakeParts",
    "SnowflakeError",
    "InvalidConfiguration",
    "ClockRegression",
    "__version__",
]
