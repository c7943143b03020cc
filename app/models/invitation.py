"""
app/models/invitation.py

Purpose: Invitation lifecycle

- Invitation statuses
- Valid status transitions (pending -> accepted | declined, both terminal)
"""

from enum import Enum
from typing import Dict, List


class InvitationStatus(str, Enum):
    PENDING = "pending"
    ACCEPTED = "accepted"
    DECLINED = "declined"


# Responded invitations are terminal
INVITATION_TRANSITIONS: Dict[InvitationStatus, List[InvitationStatus]] = {
    InvitationStatus.PENDING: [
        InvitationStatus.ACCEPTED,
        InvitationStatus.DECLINED,
    ],
    InvitationStatus.ACCEPTED: [],
    InvitationStatus.DECLINED: [],
}


def is_valid_transition(from_status: str, to_status: InvitationStatus) -> bool:
    """
    Checks if an invitation may move from its stored status to `to_status`.
    Unknown stored statuses never transition.
    """
    try:
        current = InvitationStatus(from_status)
    except ValueError:
        return False
    return to_status in INVITATION_TRANSITIONS.get(current, [])
