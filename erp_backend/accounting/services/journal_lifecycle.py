"""
JOURNAL ENTRY LIFECYCLE DOMAIN RULES

This module defines the ONLY allowed lifecycle transitions
for JournalEntry.

DESIGN PRINCIPLES:
- No database writes
- No balance mutation
- No side effects
- Single source of truth
"""

from accounting.models import JournalEntry
from core.exceptions import InvalidStateTransition

# ============================================================
# STATE DEFINITIONS
# ============================================================

TERMINAL_STATES = {
    JournalEntry.Status.REVERSED,
}

ALLOWED_TRANSITIONS = {
    JournalEntry.Status.DRAFT: {
        JournalEntry.Status.POSTED,
    },
    JournalEntry.Status.POSTED: {
        JournalEntry.Status.REVERSED,
    },
}


# ============================================================
# DOMAIN RULES
# ============================================================


def can_transition(*, from_status: str, to_status: str) -> bool:
    if from_status in TERMINAL_STATES:
        return False

    return to_status in ALLOWED_TRANSITIONS.get(from_status, set())


def validate_transition(*, entry: JournalEntry, target_status: str):
    if not can_transition(
        from_status=entry.status,
        to_status=target_status,
    ):
        raise InvalidStateTransition(
            f"Journal entry {entry.entry_number} cannot transition from "
            f"'{entry.status}' to '{target_status}'",
            entry_id=entry.pk,
            status=entry.status,
        )
