from sqlalchemy import JSON, Column, DateTime, Float, ForeignKey, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from ..database import Base
from ..utils.object_id import new_object_id


class Job(Base):
    __tablename__ = "jobs"

    id = Column(String(24), primary_key=True, default=new_object_id)
    # Owner is only stamped when the job is created through the authenticated API.
    user_id = Column(String(24), ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    type = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    salary = Column(Float, nullable=True)
    # Embedded sub-record: {"name", "contactEmail", "contactPhone"}
    company = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    user = relationship("User", back_populates="jobs")
