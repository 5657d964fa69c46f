"""
Resume model - one candidate profile per chef user (by convention).
"""
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, ForeignKey, Index
from sqlalchemy.sql import func, false
from sqlalchemy.orm import relationship
from chefdhundo.db.base import Base


class Resume(Base):
    __tablename__ = "resumes"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)

    # Contact
    name = Column(String, nullable=False, index=True)
    email = Column(String, nullable=False)
    phone = Column(String, nullable=True)

    # Location
    user_location = Column(String, nullable=True)
    city = Column(String, nullable=True, index=True)
    user_state = Column(String, nullable=True)
    pin_code = Column(String, nullable=True)
    preferred_location = Column(String, nullable=True)

    # Personal
    age_range = Column(String, nullable=True)
    gender = Column(String, nullable=True)  # Male | Female | Other | Prefer not to say

    # Professional
    profession = Column(String, nullable=True, index=True)
    job_role = Column(String, nullable=True)
    experience_years = Column(Integer, nullable=True, index=True)
    experiences = Column(Text, nullable=True)
    education = Column(String, nullable=True)
    cuisines = Column(String, nullable=True)
    languages = Column(String, nullable=True)
    certifications = Column(String, nullable=True)
    current_ctc = Column(String, nullable=True)
    expected_ctc = Column(String, nullable=True)
    notice_period = Column(String, nullable=True)

    # Preferences
    training = Column(String, nullable=True)  # yes | no | try
    joining = Column(String, nullable=True)  # immediate | specific
    work_type = Column(String, nullable=True)  # full | part | contract
    business_type = Column(String, nullable=True)  # any | new | old

    # Links
    linkedin_profile = Column(String, nullable=True)
    portfolio_website = Column(String, nullable=True)
    bio = Column(Text, nullable=True)
    passport = Column(String, nullable=True)
    photo = Column(String, nullable=True)

    verified = Column(Boolean, nullable=False, default=False, server_default=false())
    resume_file = Column(Text, nullable=True)  # signed URL of the uploaded PDF

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    user = relationship("User", back_populates="resumes")

    __table_args__ = (
        Index("idx_resumes_created_id", "created_at", "id"),
    )

    def __repr__(self):
        return f"<Resume(id={self.id}, user_id={self.user_id}, name='{self.name}')>"
