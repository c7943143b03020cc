"""
app/models/notification.py

Purpose: Notification types
"""

from enum import Enum


class NotificationType(str, Enum):
    COMPANY_INVITATION = "company_invitation"
