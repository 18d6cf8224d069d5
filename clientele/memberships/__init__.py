"""Customer memberships at suppliers."""

from clientele.memberships.models import MembershipParameters
from clientele.memberships.store import MEMBERSHIP_KIND, MembershipStore, membership_key

__all__ = [
    "MEMBERSHIP_KIND",
    "MembershipParameters",
    "MembershipStore",
    "membership_key",
]
