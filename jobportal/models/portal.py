"""Portal model."""

from sqlalchemy import Column, ForeignKey, Integer, String
from sqlalchemy.orm import relationship

from jobportal.database import Base
from jobportal.models.mixins import TimestampMixin


class Portal(Base, TimestampMixin):
    """A saved job board link, grouped by a free-text category."""

    __tablename__ = "portals"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String(255), nullable=False, index=True)
    link = Column(String(2048), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)

    # Relationships
    user = relationship("User", back_populates="portals")
