"""
Machine Node State

Sequencing state owned by one node of the ensemble, plus its fixed-schema
wire codec. Frames are five integers in FIELD_ORDER; full-state frames
overwrite every field, request frames only the identity subset.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any

from machine_core.constants.wire import (
    DEFAULT_MACHINE_NUM,
    DEFAULT_NEXT_NODE,
    DEFAULT_PULSES_SINCE_BANGED,
    DEFAULT_SEQUENCE_INDEX,
    DEFAULT_SEQUENCE_LENGTH,
    FIELD_ORDER,
    FRAME_WIDTH,
    IDLE_INDEX,
    REQUEST_FIELDS,
)
from machine_core.exceptions import InvariantViolationError, MalformedMessageError

if TYPE_CHECKING:
    from collections.abc import Iterable

    from machine_core.protocols.wire import MessageReader, MessageWriter

logger = logging.getLogger(__name__)


class ValidationPolicy(Enum):
    """What to do with decoded values that break an invariant"""
    CLAMP = "clamp"
    REJECT = "reject"
    TRUST = "trust"


@dataclass
class NodeState:
    """
    Sequencing state of one machine node.

    Attributes:
        machine_num: Identifier of the node that owns this state
        next_node: Downstream peer this node forwards activity to
        sequence_length: Number of steps in the sequence (>= 1)
        sequence_index: Current step, -1 while idle
        pulses_since_banged: Clock pulses since the node last banged
        policy: Invariant handling for decoded frames (not on the wire)

    Example:
        >>> state = NodeState()
        >>> writer = FrameWriter()
        >>> state.encode_full(writer)
        >>> writer.end_frame()
        >>> peer = NodeState()
        >>> peer.decode_full(FrameReader(writer.frames))
    """

    machine_num: int = DEFAULT_MACHINE_NUM
    next_node: int = DEFAULT_NEXT_NODE
    sequence_length: int = DEFAULT_SEQUENCE_LENGTH
    sequence_index: int = DEFAULT_SEQUENCE_INDEX
    pulses_since_banged: int = DEFAULT_PULSES_SINCE_BANGED
    policy: ValidationPolicy = field(
        default=ValidationPolicy.CLAMP, compare=False, repr=False
    )

    @classmethod
    def from_values(
        cls,
        values: Iterable[int],
        policy: ValidationPolicy = ValidationPolicy.CLAMP,
    ) -> NodeState:
        """
        Build a state from five integers in wire order.

        Values go through the same policy as decoded frames.

        Raises:
            MalformedMessageError: Not exactly five values
            InvariantViolationError: Values break an invariant under REJECT
        """
        values = tuple(values)
        if len(values) != FRAME_WIDTH:
            raise MalformedMessageError(
                f"Expected {FRAME_WIDTH} values, got {len(values)}"
            )
        state = cls(policy=policy)
        for name, value in state._validate(dict(zip(FIELD_ORDER, values))).items():
            setattr(state, name, value)
        return state

    @property
    def is_idle(self) -> bool:
        """True until the sequence has started"""
        return self.sequence_index == IDLE_INDEX

    def as_tuple(self) -> tuple[int, int, int, int, int]:
        """Fields in wire order"""
        return (
            self.machine_num,
            self.next_node,
            self.sequence_length,
            self.sequence_index,
            self.pulses_since_banged,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict (for JSON output)"""
        return dict(zip(FIELD_ORDER, self.as_tuple()))

    def clone(self) -> NodeState:
        state = NodeState(policy=self.policy)
        state.copy_from(self)
        return state

    def copy_from(self, other: NodeState) -> None:
        """Overwrite all five fields with the values of another state"""
        for name in FIELD_ORDER:
            setattr(self, name, getattr(other, name))

    def describe(self) -> str:
        """Human-readable rendering for diagnostics"""
        step = "idle" if self.is_idle else str(self.sequence_index)
        return (
            f"machine {self.machine_num} -> {self.next_node} | "
            f"step {step}/{self.sequence_length} | "
            f"pulses since bang {self.pulses_since_banged}"
        )

    # ----------------------------------------------------------
    # Wire codec
    # ----------------------------------------------------------

    def encode_full(self, writer: MessageWriter) -> None:
        """
        Append the five fields to an outgoing message.

        Args:
            writer: Sink accepting integers in order
        """
        for value in self.as_tuple():
            writer.write_int(value)

    def decode_full(self, reader: MessageReader) -> None:
        """
        Apply every full-state frame the reader yields.

        Each frame overwrites all five fields; the last frame wins.
        A reader with no frames leaves the state unchanged.

        Raises:
            MalformedMessageError: Frame is short or holds a non-integer
            InvariantViolationError: Frame breaks an invariant under REJECT
        """
        self._decode(reader, FIELD_ORDER)

    def decode_request(self, reader: MessageReader) -> None:
        """
        Apply every request frame the reader yields.

        Request frames use the full five-slot layout. Only machine_num,
        next_node and sequence_length are applied; the trailing two slots
        are consumed and discarded.

        Raises:
            MalformedMessageError: Frame is short or holds a non-integer
            InvariantViolationError: Frame breaks an invariant under REJECT
        """
        self._decode(reader, REQUEST_FIELDS)

    def _decode(self, reader: MessageReader, targets: tuple[str, ...]) -> None:
        """Read frames of FRAME_WIDTH integers and assign the target fields"""
        while reader.next_frame():
            values = _read_frame(reader)
            updates = {
                name: value
                for name, value in zip(FIELD_ORDER, values)
                if name in targets
            }
            updates = self._validate(updates)
            # All values are checked before any assignment
            for name, value in updates.items():
                setattr(self, name, value)

    def _validate(self, updates: dict[str, int]) -> dict[str, int]:
        if self.policy is ValidationPolicy.TRUST:
            return updates

        clamped, problems = _check_invariants(updates)
        if not problems:
            return updates

        if self.policy is ValidationPolicy.REJECT:
            raise InvariantViolationError("; ".join(problems))

        logger.warning(
            f"Clamping frame for machine {updates.get('machine_num')}: "
            f"{'; '.join(problems)}"
        )
        return clamped


def _read_frame(reader: MessageReader) -> tuple[int, ...]:
    """Consume exactly FRAME_WIDTH integers from the current frame"""
    available = reader.remaining
    if available < FRAME_WIDTH:
        raise MalformedMessageError(
            f"Expected {FRAME_WIDTH} integers per frame, got {available}"
        )

    values = []
    for name in FIELD_ORDER:
        value = reader.read_int()
        if isinstance(value, bool) or not isinstance(value, int):
            raise MalformedMessageError(
                f"Field '{name}' must be an integer, got {type(value).__name__}"
            )
        values.append(value)

    if reader.remaining:
        logger.debug(f"Ignoring {reader.remaining} trailing integers in frame")
    return tuple(values)


def _check_invariants(updates: dict[str, int]) -> tuple[dict[str, int], list[str]]:
    """
    Check decoded values against the NodeState invariants.

    Only fields present in updates are checked, so request frames are
    validated on sequence_length alone.

    Returns:
        Tuple of (clamped updates, list of violation descriptions)
    """
    clamped = dict(updates)
    problems: list[str] = []

    length = clamped.get("sequence_length")
    if length is not None and length < 1:
        problems.append(f"sequence_length {length} < 1")
        clamped["sequence_length"] = length = 1

    index = clamped.get("sequence_index")
    if index is not None and length is not None:
        if index >= length:
            problems.append(f"sequence_index {index} >= sequence_length {length}")
            clamped["sequence_index"] = length - 1
        elif index < IDLE_INDEX:
            problems.append(f"sequence_index {index} < {IDLE_INDEX}")
            clamped["sequence_index"] = IDLE_INDEX

    pulses = clamped.get("pulses_since_banged")
    if pulses is not None and pulses < 0:
        problems.append(f"pulses_since_banged {pulses} < 0")
        clamped["pulses_since_banged"] = 0

    return clamped, problems
