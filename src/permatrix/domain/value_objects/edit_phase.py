"""Lifecycle phases of one matrix edit."""

from enum import StrEnum


class EditPhase(StrEnum):
    """Loading -> Ready <-> Saving / ConfirmingDiscard; any -> Error."""

    LOADING = "loading"
    READY = "ready"
    SAVING = "saving"
    CONFIRMING_DISCARD = "confirming_discard"
    ERROR = "error"


ALLOWED_TRANSITIONS: dict[EditPhase, frozenset[EditPhase]] = {
    EditPhase.LOADING: frozenset({EditPhase.READY, EditPhase.ERROR}),
    EditPhase.READY: frozenset(
        {EditPhase.SAVING, EditPhase.CONFIRMING_DISCARD, EditPhase.LOADING, EditPhase.ERROR}
    ),
    EditPhase.SAVING: frozenset({EditPhase.READY, EditPhase.ERROR}),
    EditPhase.CONFIRMING_DISCARD: frozenset({EditPhase.READY, EditPhase.ERROR}),
    EditPhase.ERROR: frozenset({EditPhase.LOADING, EditPhase.SAVING, EditPhase.READY}),
}


def can_transition(current: EditPhase, target: EditPhase) -> bool:
    return target in ALLOWED_TRANSITIONS[current]
