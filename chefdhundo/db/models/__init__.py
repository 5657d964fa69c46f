"""
Database models module.

This module imports all database models to ensure they are registered with SQLAlchemy's Base.metadata
before table creation.

All models must be imported here to be included in database migrations and table creation.
"""
from chefdhundo.db.models.user import User
from chefdhundo.db.models.resume import Resume
from chefdhundo.db.models.payment import Payment
from chefdhundo.db.models.subscription import Subscription
from chefdhundo.db.models.announcement import Announcement

__all__ = [
    "User",
    "Resume",
    "Payment",
    "Subscription",
    "Announcement",
]
