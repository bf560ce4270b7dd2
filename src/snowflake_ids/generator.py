"""
Snowflake - 64-bit time-ordered identifier generator

Each generator owns a node id and a custom epoch, and mints identifiers
laid out as 41 bits of milliseconds since the epoch, 10 bits of node id and
12 bits of per-millisecond sequence. Distinct node ids are the only
coordination needed between generators.

Example:
    >>> from snowflake_ids import Snowflake
    >>> generator = Snowflake(7)
    >>> snowflake_id = generator.next_id()
    >>> generator.parse(snowflake_id).node_id
    7

Fun fact: 4096 ids per millisecond per node is about four billion ids per
second across a full 1024-node deployment.
"""

import threading
from datetime import datetime, timedelta, timezone
from typing import NamedTuple

from snowflake_ids.kernel.errors import ClockRegression, InvalidConfiguration
from snowflake_ids.kernel.layout import (
    DEFAULT_CUSTOM_EPOCH,
    EPOCH_BITS,
    MAX_NODE_ID,
    MAX_SEQUENCE,
    NODE_ID_BITS,
    NODE_ID_SHIFT,
    SEQUENCE_BITS,
    TIMESTAMP_SHIFT,
)
from snowflake_ids.kernel.logging import get_logger
from snowflake_ids.kernel.metrics import (
    clock_regressions_total,
    ids_generated_total,
    sequence_exhaustions_total,
)
from snowflake_ids.kernel.node_id import NodeIdProvider, default_node_id_provider
from snowflake_ids.kernel.settings import GeneratorSettings
from snowflake_ids.kernel.time import ClockProvider, default_clock

logger = get_logger(__name__)

_UNIX_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class SnowflakeParts(NamedTuple):
    """Decomposed identifier: absolute timestamp (ms since 1970), node id, sequence"""

    timestamp: int
    node_id: int
    sequence: int

    @property
    def created_at(self) -> datetime:
        """Timestamp as an aware UTC datetime"""
        return _UNIX_EPOCH + timedelta(milliseconds=self.timestamp)


def _is_int(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


class Snowflake:
    """
    Thread-safe snowflake identifier generator

    Construction forms:
        Snowflake(node_id, custom_epoch)
        Snowflake(node_id)        # default custom epoch
        Snowflake()               # node id derived from local hardware

    Generation state (last timestamp, sequence) belongs to the instance and
    is guarded by an instance lock; independent generators share nothing.
    """

    def __init__(
        self,
        node_id: int | None = None,
        custom_epoch: int = DEFAULT_CUSTOM_EPOCH,
        *,
        clock: ClockProvider | None = None,
        node_id_provider: NodeIdProvider | None = None,
    ) -> None:
        """
        Initialize generator

        Args:
            node_id: Node identifier in [0, 1023]; derived via node_id_provider if None
            custom_epoch: Epoch in ms since 1970 that timestamps are measured from
            clock: Wall-clock source (uses the system clock if None)
            node_id_provider: Provider consulted once when node_id is None

        Raises:
            InvalidConfiguration: If node_id is outside [0, 1023] or a value is not an integer
        """
        if node_id is None:
            result = (node_id_provider or default_node_id_provider).provide()
            node_id = result.node_id
            node_id_source = result.source
        else:
            node_id_source = "configured"

        if not _is_int(node_id) or not 0 <= node_id <= MAX_NODE_ID:
            raise InvalidConfiguration(
                "node_id",
                node_id,
                f"invalid node id {node_id!r}: node id must be between 0 and {MAX_NODE_ID}",
            )
        if not _is_int(custom_epoch):
            raise InvalidConfiguration(
                "custom_epoch",
                custom_epoch,
                f"invalid custom epoch {custom_epoch!r}: must be integer milliseconds since 1970",
            )

        self._node_id = node_id
        self._custom_epoch = custom_epoch
        self._clock = clock or default_clock

        self._lock = threading.Lock()
        self._last_timestamp: int | None = None
        self._sequence = 0

        label = str(node_id)
        self._ids_generated = ids_generated_total.labels(node_id=label)
        self._sequence_exhaustions = sequence_exhaustions_total.labels(node_id=label)
        self._clock_regressions = clock_regressions_total.labels(node_id=label)

        logger.info(
            "Snowflake generator initialized",
            node_id=node_id,
            node_id_source=node_id_source,
            custom_epoch=custom_epoch,
        )

    @classmethod
    def from_settings(
        cls,
        settings: GeneratorSettings,
        *,
        clock: ClockProvider | None = None,
        node_id_provider: NodeIdProvider | None = None,
    ) -> "Snowflake":
        """Build a generator from GeneratorSettings"""
        return cls(
            settings.node_id,
            settings.custom_epoch,
            clock=clock,
            node_id_provider=node_id_provider,
        )

    @property
    def node_id(self) -> int:
        return self._node_id

    @property
    def custom_epoch(self) -> int:
        return self._custom_epoch

    @property
    def last_timestamp(self) -> int | None:
        """Timestamp offset of the most recent emission, None before the first"""
        return self._last_timestamp

    @property
    def sequence(self) -> int:
        """Sequence assigned to the most recent emission"""
        return self._sequence

    def next_id(self) -> int:
        """
        Generate a new identifier

        Within one millisecond the sequence counts up from 0. Once all 4096
        values are used the call spins on the clock, holding the lock, until
        the next millisecond starts. The stall is expected to be well under a
        millisecond, so no sleep or backoff is involved.

        Returns:
            Integer identifier, positive once the clock is past the custom epoch

        Raises:
            ClockRegression: If the clock reads earlier than the last emission.
                State is left untouched.
        """
        with self._lock:
            current = self._timestamp()
            last = self._last_timestamp

            if last is not None and current < last:
                self._clock_regressions.inc()
                logger.error(
                    "Clock moved backwards, refusing to generate id",
                    node_id=self._node_id,
                    last_timestamp=last,
                    current_timestamp=current,
                )
                raise ClockRegression(last, current)

            if current == last:
                sequence = (self._sequence + 1) & MAX_SEQUENCE
                if sequence == 0:
                    self._sequence_exhaustions.inc()
                    logger.debug(
                        "Sequence exhausted, waiting for next millisecond",
                        node_id=self._node_id,
                        last_timestamp=last,
                    )
                    current = self._wait_next_millis(last)
            else:
                sequence = 0

            snowflake_id = (
                (current << TIMESTAMP_SHIFT)
                | (self._node_id << NODE_ID_SHIFT)
                | sequence
            )

            # Commit only once the id is fully composed
            self._last_timestamp = current
            self._sequence = sequence

        self._ids_generated.inc()
        return snowflake_id

    def parse(self, snowflake_id: int) -> SnowflakeParts:
        """
        Decompose an identifier into (timestamp, node_id, sequence)

        Uses this generator's custom epoch. Any integer is accepted; values not
        produced by a generator with the same epoch decode to meaningless but
        well-defined fields.
        """
        return SnowflakeParts(
            timestamp=(snowflake_id >> TIMESTAMP_SHIFT) + self._custom_epoch,
            node_id=(snowflake_id >> NODE_ID_SHIFT) & MAX_NODE_ID,
            sequence=snowflake_id & MAX_SEQUENCE,
        )

    def describe(self) -> str:
        """Human-readable summary of the layout and configuration"""
        return (
            f"Snowflake [EPOCH_BITS={EPOCH_BITS}, NODE_ID_BITS={NODE_ID_BITS}, "
            f"SEQUENCE_BITS={SEQUENCE_BITS}, CUSTOM_EPOCH={self._custom_epoch}, "
            f"NodeId={self._node_id}]"
        )

    def __repr__(self) -> str:
        return self.describe()

    def _timestamp(self) -> int:
        return self._clock.now_millis() - self._custom_epoch

    def _wait_next_millis(self, last_timestamp: int) -> int:
        current = self._timestamp()
        while current <= last_timestamp:
            current = self._timestamp()
        return current
