"""
Review status and moderation value objects.
"""

from enum import Enum


class ReviewStatus(str, Enum):
    """Review status enumeration."""

    DRAFT = "draft"
    SUBMITTED = "submitted"
    PUBLISHED = "published"
    FLAGGED = "flagged"
    REMOVED = "removed"
    HIDDEN = "hidden"


class ModerationAction(str, Enum):
    """Moderator decision on a review."""

    APPROVE = "approve"
    REJECT = "reject"
    HIDE = "hide"

    def resulting_status(self) -> ReviewStatus:
        return {
            ModerationAction.APPROVE: ReviewStatus.PUBLISHED,
            ModerationAction.REJECT: ReviewStatus.REMOVED,
            ModerationAction.HIDE: ReviewStatus.HIDDEN,
        }[self]


class FlagType(str, Enum):
    """Reason category for flagging a review."""

    INAPPROPRIATE = "inappropriate"
    FAKE = "fake"
    SPAM = "spam"
    HARASSMENT = "harassment"
    COPYRIGHT = "copyright"


class VerificationMethod(str, Enum):
    """How a review's underlying booking was verified."""

    BOOKING_CONFIRMED = "booking_confirmed"
    PAYMENT_VERIFIED = "payment_verified"
    MANUAL_VERIFICATION = "manual_verification"


class ReviewVisibility(str, Enum):
    """Who may read a review."""

    PUBLIC = "public"
    PRIVATE = "private"
    ARTIST_ONLY = "artist_only"
