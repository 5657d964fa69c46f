"""
Contact masking for candidate records.

Basic (free) viewers see partially redacted email addresses and phone
numbers; pro and admin viewers see the raw values. Every function here is
pure so the same rules apply on the server and in the client SDK.
"""
from typing import Optional

MASK_CHAR = "*"
UNMASKED_ROLES = ("pro", "admin")


def can_view_contacts(role: Optional[str]) -> bool:
    """True when the viewer's role may see full contact details."""
    return role in UNMASKED_ROLES


def _mask_span(value: str, keep: int, tail: int = 0) -> str:
    # Hide everything between the first ``keep`` and last ``tail`` characters.
    # Leading characters are given up until the result differs from the input.
    keep = max(0, min(keep, len(value) - tail - 1))
    while True:
        masked = value[:keep] + MASK_CHAR * (len(value) - keep - tail) + value[len(value) - tail:]
        if masked != value or keep == 0:
            return masked
        keep -= 1


def mask_email(email: Optional[str], role: Optional[str]) -> Optional[str]:
    """
    Mask an email address for the given viewer role.

    ``chef.amit@example.com`` becomes ``ch*******@example.com`` for basic
    viewers. The domain and overall length are preserved.
    """
    if not email or can_view_contacts(role):
        return email

    local, sep, domain = email.rpartition("@")
    if not sep or not local:
        return _mask_span(email, 2)

    return f"{_mask_span(local, 2)}@{domain}"


def mask_phone(phone: Optional[str], role: Optional[str]) -> Optional[str]:
    """
    Mask a phone number for the given viewer role.

    Keeps the first two and last two characters (``98******10``). Numbers of
    four characters or fewer keep only their first character.
    """
    if not phone or can_view_contacts(role):
        return phone

    if len(phone) <= 4:
        return _mask_span(phone, 1)

    return _mask_span(phone, 2, tail=2)


def mask_resume_contacts(resume, role: Optional[str]):
    """
    Return a copy of a resume record with its contacts masked for ``role``.

    Accepts either a plain dict or a pydantic model.
    """
    email = resume["email"] if isinstance(resume, dict) else resume.email
    phone = resume.get("phone") if isinstance(resume, dict) else resume.phone
    updates = {
        "email": mask_email(email, role),
        "phone": mask_phone(phone, role),
    }

    if isinstance(resume, dict):
        return {**resume, **updates}
    return resume.model_copy(update=updates)
