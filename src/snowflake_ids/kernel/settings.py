"""
Generator settings

Deployment-level configuration for a generator. Range checks on the node id
live in the generator constructor; settings only carry and parse values.
"""

import os
from collections.abc import Mapping

from pydantic import BaseModel, Field

from snowflake_ids.kernel.errors import InvalidConfiguration
from snowflake_ids.kernel.layout import DEFAULT_CUSTOM_EPOCH

ENV_NODE_ID = "SNOWFLAKE_NODE_ID"
ENV_CUSTOM_EPOCH = "SNOWFLAKE_CUSTOM_EPOCH"


class GeneratorSettings(BaseModel):
    """
    Configuration for a Snowflake generator

    A node_id of None means "derive it from the local hardware".
    """

    node_id: int | None = Field(
        default=None,
        description="Node identifier (0-1023); derived automatically if unset",
    )

    custom_epoch: int = Field(
        default=DEFAULT_CUSTOM_EPOCH,
        description="Custom epoch in milliseconds since 1970-01-01T00:00:00Z",
    )

    model_config = {"frozen": True}

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "GeneratorSettings":
        """
        Build settings from SNOWFLAKE_NODE_ID and SNOWFLAKE_CUSTOM_EPOCH

        Args:
            environ: Mapping to read from (defaults to os.environ)

        Raises:
            InvalidConfiguration: If a variable is set but is not an integer
        """
        env = os.environ if environ is None else environ
        values: dict[str, int] = {}
        for field, name in (("node_id", ENV_NODE_ID), ("custom_epoch", ENV_CUSTOM_EPOCH)):
            raw = env.get(name, "").strip()
            if not raw:
                continue
            try:
                values[field] = int(raw)
            except ValueError:
                raise InvalidConfiguration(
                    field, raw, f"{name} must be an integer, got {raw!r}"
                ) from None
        return cls(**values)
