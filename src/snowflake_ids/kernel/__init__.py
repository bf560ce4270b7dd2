"""
Kernel - building blocks shared by the generator

Bit layout constants, the clock and node id abstractions, settings, errors,
logging and metrics.
"""

from snowflake_ids.kernel.errors import ClockRegression, InvalidConfiguration, SnowflakeError
from snowflake_ids.kernel.layout import DEFAULT_CUSTOM_EPOCH, MAX_NODE_ID, MAX_SEQUENCE
from snowflake_ids.kernel.node_id import (
    HardwareNodeIdProvider,
    NodeIdProvider,
    NodeIdResult,
    RandomNodeIdProvider,
    StaticNodeIdProvider,
)
from snowflake_ids.kernel.settings import GeneratorSettings
from snowflake_ids.kernel.time import ClockProvider, SystemClock, TestClock

__all__ = [
    # Layout
    "DEFAULT_CUSTOM_EPOCH",
    "MAX_NODE_ID",
    "MAX_SEQUENCE",
    # Time
    "ClockProvider",
    "SystemClock",
    "TestClock",
    # Node ids
    "NodeIdProvider",
    "NodeIdResult",
    "HardwareNodeIdProvider",
    "RandomNodeIdProvider",
    "StaticNodeIdProvider",
    # Settings
    "GeneratorSettings",
    # Errors
    "SnowflakeError",
    "InvalidConfiguration",
    "ClockRegression",
]
