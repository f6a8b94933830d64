from .referral import Referral, ReferralStatus
from .user import User
from .waiting_list import WaitingListEntry

__all__ = ["Referral", "ReferralStatus", "User", "WaitingListEntry"]
