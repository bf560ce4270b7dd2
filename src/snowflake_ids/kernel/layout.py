"""
Bit layout of a snowflake identifier

    | 41 bits timestamp offset | 10 bits node id | 12 bits sequence |

63 payload bits, so identifiers stay positive as signed 64-bit integers for
roughly 69 years after the custom epoch.
"""

EPOCH_BITS = 41
NODE_ID_BITS = 10
SEQUENCE_BITS = 12

MAX_NODE_ID = (1 << NODE_ID_BITS) - 1
MAX_SEQUENCE = (1 << SEQUENCE_BITS) - 1

NODE_ID_SHIFT = SEQUENCE_BITS
TIMESTAMP_SHIFT = NODE_ID_BITS + SEQUENCE_BITS

# 2023-03-28T10:40:00Z
DEFAULT_CUSTOM_EPOCH = 1_680_000_000_000
