"""
Pytest configuration and shared fixtures

Fun fact: The name "conftest" comes from pytest's configuration testing
framework. Fixtures defined here are available to every test module below
this directory.
"""

import pytest

from snowflake_ids.generator import Snowflake
from snowflake_ids.kernel.layout import DEFAULT_CUSTOM_EPOCH
from snowflake_ids.kernel.node_id import StaticNodeIdProvider
from snowflake_ids.kernel.time import TestClock

# Five milliseconds after the default custom epoch
START_MILLIS = DEFAULT_CUSTOM_EPOCH + 5


@pytest.fixture
def test_clock() -> TestClock:
    """Provide a controllable clock frozen just after the default epoch"""
    return TestClock(START_MILLIS)


@pytest.fixture
def generator(test_clock: TestClock) -> Snowflake:
    """Provide a node-7 generator driven by the test clock"""
    return Snowflake(7, DEFAULT_CUSTOM_EPOCH, clock=test_clock)


class CountingNodeIdProvider:
    """Static provider that records how often it was consulted"""

    def __init__(self, value: int) -> None:
        self.calls = 0
        self._inner = StaticNodeIdProvider(value)

    def provide(self):
        self.calls += 1
        return self._inner.provide()


@pytest.fixture
def counting_provider() -> CountingNodeIdProvider:
    return CountingNodeIdProvider(42)
