from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Day(Base):
    __tablename__ = "days"
    __table_args__ = (UniqueConstraint("trip_id", "day_number", name="uq_days_trip_day_number"),)

    id = Column(Integer, primary_key=True, index=True)
    trip_id = Column(Integer, ForeignKey("trips.id"), nullable=False, index=True)
    # max(day_number) + 1 at creation, computed by the INSERT itself
    day_number = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Activities are removed explicitly by the service, not by the ORM
    activities = relationship("Activity", back_populates="day", passive_deletes=True)
    trip = relationship("Trip", back_populates="days")

    def to_dict(self, activities=None):
        data = {
            "id": self.id,
            "dayNumber": self.day_number,
        }
        if activities is not None:
            data["activities"] = [activity.to_dict() for activity in activities]
        return data
