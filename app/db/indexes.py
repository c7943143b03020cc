"""
app/db/indexes.py

Purpose: Database index management

- Performance indexes for the equality queries the services issue
- Membership uniqueness stays an application-level check, so the
  (userId, companyId) index is deliberately non-unique
"""

from pymongo import ASCENDING, DESCENDING

from app.db import collections
from app.db.store import DocumentStore
from app.core.logging import get_logger

logger = get_logger(__name__)


async def create_indexes(store: DocumentStore):
    """
    Creates all necessary database indexes.
    This function is idempotent - safe to run multiple times.
    """
    try:
        users = store.collection(collections.USERS)
        memberships = store.collection(collections.MEMBERSHIPS)
        invitations = store.collection(collections.INVITATIONS)
        notifications = store.collection(collections.NOTIFICATIONS)

        logger.info("Creating database indexes...")

        # ==============================================
        # USERS
        # ==============================================

        # Member lookup by email when inviting
        await users.create_index("email", name="user_email_idx")
        logger.debug("Created index on users.email")

        # ==============================================
        # MEMBERSHIPS
        # ==============================================

        await memberships.create_index(
            [("userId", ASCENDING), ("companyId", ASCENDING)],
            name="membership_user_company_idx"
        )
        logger.debug("Created compound index on memberships.userId + companyId")

        await memberships.create_index("companyId", name="membership_company_idx")
        logger.debug("Created index on memberships.companyId")

        # ==============================================
        # INVITATIONS
        # ==============================================

        # Pending-invitation check for a (user, company) pair
        await invitations.create_index(
            [("userId", ASCENDING), ("companyId", ASCENDING), ("status", ASCENDING)],
            name="invitation_pair_status_idx"
        )
        logger.debug("Created compound index on invitations.userId + companyId + status")

        # ==============================================
        # NOTIFICATIONS
        # ==============================================

        # Newest-first listing per user
        await notifications.create_index(
            [("userId", ASCENDING), ("createdAt", DESCENDING)],
            name="notification_user_created_idx"
        )
        logger.debug("Created compound index on notifications.userId + createdAt")

        # Unread counter
        await notifications.create_index(
            [("userId", ASCENDING), ("read", ASCENDING)],
            name="notification_user_read_idx"
        )
        logger.debug("Created compound index on notifications.userId + read")

        # Notification linked to an invitation
        await notifications.create_index(
            [("userId", ASCENDING), ("invitationId", ASCENDING)],
            name="notification_invitation_idx"
        )
        logger.debug("Created compound index on notifications.userId + invitationId")

        logger.info("All database indexes created successfully")

    except Exception as e:
        logger.error(f"Failed to create indexes: {str(e)}", exc_info=True)
        raise
