"""
Admin dashboard state.

Each action is a single request. On success the affected item in the local
list is patched or removed; on failure a notice is recorded and the lists are
left as they were.
"""
import logging
from typing import List, Optional

from chefdhundo.client.api import ApiError, ChefDhundoClient

logger = logging.getLogger(__name__)


class AdminConsole:
    def __init__(self, client: ChefDhundoClient):
        self.client = client
        self.users: List[dict] = []
        self.resumes: List[dict] = []
        self.notices: List[str] = []

    @property
    def last_notice(self) -> Optional[str]:
        return self.notices[-1] if self.notices else None

    def _notify(self, message: str) -> None:
        logger.info(message)
        self.notices.append(message)

    def _patch(self, items: List[dict], item_id: int, changes: dict) -> None:
        for item in items:
            if item.get("id") == item_id:
                item.update(changes)

    def load(self) -> bool:
        try:
            self.users = self.client.list_users()
            self.resumes = self.client.list_all_resumes().get("data") or []
        except ApiError as e:
            self._notify(f"Failed to load dashboard: {e.detail}")
            return False
        return True

    def change_role(self, user_id: int, role: str) -> bool:
        try:
            user = self.client.update_user_role(user_id, role)
        except ApiError as e:
            self._notify(f"Failed to update role: {e.detail}")
            return False
        self._patch(self.users, user_id, {"role": user["role"]})
        self._notify(f"User role updated to {user['role']}")
        return True

    def set_chef_status(self, user_id: int, chef: str) -> bool:
        try:
            user = self.client.update_chef_status(user_id, chef)
        except ApiError as e:
            self._notify(f"Failed to update chef status: {e.detail}")
            return False
        self._patch(self.users, user_id, {"chef": user["chef"]})
        self._notify(f"Chef status updated to {user['chef']}")
        return True

    def set_verified(self, resume_id: int, verified: bool) -> bool:
        try:
            resume = self.client.set_resume_verification(resume_id, verified)
        except ApiError as e:
            self._notify(f"Failed to update verification: {e.detail}")
            return False
        self._patch(self.resumes, resume_id, {"verified": resume["verified"]})
        self._notify("Resume verified" if resume["verified"] else "Resume unverified")
        return True

    def delete_resume(self, resume_id: int) -> bool:
        """
        Delete a resume. The server resets the owner's chef flag in the same
        transaction; the local user list mirrors the returned value.
        """
        try:
            result = self.client.delete_resume(resume_id)
        except ApiError as e:
            self._notify(f"Failed to delete resume: {e.detail}")
            return False

        self.resumes = [r for r in self.resumes if r.get("id") != resume_id]
        owner = result.get("data") or {}
        if owner.get("user_id") is not None:
            self._patch(self.users, owner["user_id"], {"chef": owner.get("chef", "no")})
        self._notify("Resume deleted")
        return True

    def delete_user(self, user_id: int) -> bool:
        try:
            self.client.delete_user(user_id)
        except ApiError as e:
            self._notify(f"Failed to delete user: {e.detail}")
            return False
        self.users = [u for u in self.users if u.get("id") != user_id]
        self.resumes = [r for r in self.resumes if r.get("user_id") != user_id]
        self._notify("User deleted")
        return True
