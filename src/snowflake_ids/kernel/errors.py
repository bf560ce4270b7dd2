"""
Custom exceptions for snowflake-ids

Two failure modes exist and both are fatal to the call that raised them:
bad configuration at construction, and a wall clock that ran backwards.

Fun fact: Twitter announced Snowflake in 2010 after MySQL auto-increment
columns stopped scaling across shards. The clock-regression check has been
there since day one.
"""


class SnowflakeError(Exception):
    """Base exception for all snowflake-ids errors"""

    pass


class InvalidConfiguration(SnowflakeError):
    """
    Raised when a generator is configured with an unusable value

    No generator instance is created. Callers must supply a valid node
    identifier or rely on automatic derivation.
    """

    def __init__(self, field: str, value: object, message: str = "") -> None:
        self.field = field
        self.value = value
        super().__init__(message or f"Invalid {field}: {value!r}")


class ClockRegression(SnowflakeError):
    """
    Raised when the wall clock is observed earlier than the last emission

    The generator never clamps or retries: emitting an id here could repeat
    a (timestamp, sequence) pair. Treat as fatal to this generator instance.
    """

    def __init__(self, last_timestamp: int, current_timestamp: int) -> None:
        self.last_timestamp = last_timestamp
        self.current_timestamp = current_timestamp
        super().__init__(
            f"System clock moved backwards: last emission at offset {last_timestamp} ms, "
            f"clock now reads offset {current_timestamp} ms "
            f"({last_timestamp - current_timestamp} ms behind)"
        )
