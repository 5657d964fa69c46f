"""
Script to grant a role to an existing account, e.g. to bootstrap the first admin.
Run: python -m scripts.set_user_role someone@example.com admin
"""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from chefdhundo.db.session import SessionLocal
from chefdhundo.services import user_service
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def set_role_by_email(email: str, role: str) -> bool:
    """Set the role of the account registered with ``email``."""
    db = SessionLocal()
    try:
        user = user_service.get_user_by_email(db, email)
        if not user:
            logger.error(f"User {email} not found. They must sign in once before a role can be set.")
            return False

        logger.info(f"Found existing user: {email} (ID: {user.id}, role: {user.role})")
        user_service.set_user_role(db, user.id, role)
        logger.info(f"Successfully set user {email} to {role}")
        return True

    except ValueError as e:
        logger.error(str(e))
        return False
    except Exception as e:
        db.rollback()
        logger.error(f"Error updating user: {e}", exc_info=True)
        return False
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python -m scripts.set_user_role <email> <basic|pro|admin>")
        sys.exit(2)

    email, role = sys.argv[1], sys.argv[2]
    if set_role_by_email(email, role):
        print(f"\n[SUCCESS] User {email} is now {role}")
    else:
        print(f"\n[ERROR] Failed to update user {email}")
        sys.exit(1)
