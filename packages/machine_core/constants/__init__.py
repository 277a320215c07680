"""Constants shared by machine sync packages."""

from machine_core.constants.wire import (
    DEFAULT_NEXT_NODE,
    DEFAULT_MACHINE_NUM,
    DEFAULT_PULSES_SINCE_BANGED,
    DEFAULT_SEQUENCE_INDEX,
    DEFAULT_SEQUENCE_LENGTH,
    FIELD_ORDER,
    FRAME_WIDTH,
    IDLE_INDEX,
    OSC_BATCH_ADDRESS,
    OSC_REQUEST_ADDRESS,
    OSC_STATE_ADDRESS,
    REQUEST_FIELDS,
)

__all__ = [
    "FIELD_ORDER",
    "FRAME_WIDTH",
    "REQUEST_FIELDS",
    "IDLE_INDEX",
    "DEFAULT_MACHINE_NUM",
    "DEFAULT_NEXT_NODE",
    "DEFAULT_SEQUENCE_LENGTH",
    "DEFAULT_SEQUENCE_INDEX",
    "DEFAULT_PULSES_SINCE_BANGED",
    "OSC_STATE_ADDRESS",
    "OSC_REQUEST_ADDRESS",
    "OSC_BATCH_ADDRESS",
]
