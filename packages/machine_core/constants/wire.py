"""Wire layout constants for node state frames.

Every frame is five signed integers in FIELD_ORDER. Request frames share
the layout but only the first three slots are meaningful.
"""

from typing import Final

FIELD_ORDER: Final[tuple[str, ...]] = (
    "machine_num",
    "next_node",
    "sequence_length",
    "sequence_index",
    "pulses_since_banged",
)
FRAME_WIDTH: Final[int] = len(FIELD_ORDER)

# Identity subset carried by request frames
REQUEST_FIELDS: Final[tuple[str, ...]] = FIELD_ORDER[:3]

# Sequence index of a node that has not started
IDLE_INDEX: Final[int] = -1

DEFAULT_MACHINE_NUM: Final[int] = 0
DEFAULT_NEXT_NODE: Final[int] = 0
DEFAULT_SEQUENCE_LENGTH: Final[int] = 4
DEFAULT_SEQUENCE_INDEX: Final[int] = IDLE_INDEX
DEFAULT_PULSES_SINCE_BANGED: Final[int] = 0

# OSC addresses for the two message roles
OSC_STATE_ADDRESS: Final[str] = "/machine/state"
OSC_REQUEST_ADDRESS: Final[str] = "/machine/request"

# Batch of frames packed by FrameSerializer into one OSC blob
OSC_BATCH_ADDRESS: Final[str] = "/machine/batch"
