"""
Signed-in user record with a 24 hour cache.
"""
import logging
from typing import Optional

from chefdhundo.client.api import ApiError, ChefDhundoClient, UnauthorizedError
from chefdhundo.client.cache import CurrentUserCache

logger = logging.getLogger(__name__)


class Account:
    def __init__(self, client: ChefDhundoClient, cache: Optional[CurrentUserCache] = None):
        self.client = client
        self.cache = cache or CurrentUserCache()
        self.error: Optional[str] = None

    def current_user(self, force: bool = False) -> Optional[dict]:
        """Cached user record; None when signed out or on failure."""
        if not force:
            cached = self.cache.get()
            if cached is not None:
                return cached

        try:
            user = self.client.get_current_user()
        except UnauthorizedError:
            self.cache.clear()
            self.error = None
            return None
        except ApiError as e:
            logger.warning(f"Failed to load current user: {e.detail}")
            self.error = e.detail
            return None

        self.error = None
        self.cache.put(user)
        return user

    def sign_in(self, email: str, name: Optional[str] = None, photo: Optional[str] = None) -> Optional[dict]:
        """Create or refresh the account after the identity provider signs the user in."""
        try:
            user = self.client.sync_user(email, name=name, photo=photo)
        except ApiError as e:
            logger.warning(f"Failed to sync user: {e.detail}")
            self.error = e.detail
            return None
        self.cache.put(user)
        return user

    def update_profile(self, name: Optional[str] = None, photo: Optional[str] = None) -> Optional[dict]:
        self.cache.clear()
        try:
            user = self.client.update_profile(name=name, photo=photo)
        except ApiError as e:
            logger.warning(f"Failed to update profile: {e.detail}")
            self.error = e.detail
            return None
        self.cache.put(user)
        return user

    def sign_out(self) -> None:
        self.cache.clear()
        self.client.token = None
