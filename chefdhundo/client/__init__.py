from chefdhundo.client.api import (
    ApiError,
    AsyncChefDhundoClient,
    ChefDhundoClient,
    NetworkError,
    UnauthorizedError,
)
from chefdhundo.client.account import Account
from chefdhundo.client.admin import AdminConsole
from chefdhundo.client.announcements import AnnouncementFeed
from chefdhundo.client.cache import CurrentUserCache, ResumePageCache
from chefdhundo.client.payment import CALL_TO_ACTION, PaymentStatusPoller, PollResult, PollState
from chefdhundo.client.resumes import ResumeBrowser, unique_professions

__all__ = [
    "Account",
    "AdminConsole",
    "AnnouncementFeed",
    "ApiError",
    "AsyncChefDhundoClient",
    "CALL_TO_ACTION",
    "ChefDhundoClient",
    "CurrentUserCache",
    "NetworkError",
    "PaymentStatusPoller",
    "PollResult",
    "PollState",
    "ResumeBrowser",
    "ResumePageCache",
    "UnauthorizedError",
    "unique_professions",
]
