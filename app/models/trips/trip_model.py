from sqlalchemy import Column, Integer, String, DateTime, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Trip(Base):
    __tablename__ = "trips"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    dates = Column(String, nullable=True)
    islands = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    days = relationship("Day", back_populates="trip")

    def to_dict(self):
        """Trip info as sent over the wire"""
        return {
            "title": self.title,
            "dates": self.dates,
            "islands": self.islands,
        }
