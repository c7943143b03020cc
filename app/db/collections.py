"""Collection names (schema-in-code).

MongoDB creates collections on first write. These constants are the single
source of truth for the collection names used by the services.
"""

USERS = "users"
COMPANIES = "companies"
MEMBERSHIPS = "memberships"
INVITATIONS = "invitations"
NOTIFICATIONS = "notifications"

ALL_COLLECTIONS = (USERS, COMPANIES, MEMBERSHIPS, INVITATIONS, NOTIFICATIONS)
