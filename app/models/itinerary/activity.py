# app/models/itinerary/activity.py

import json
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, func
from sqlalchemy.orm import relationship
from app.core.database import Base


class Activity(Base):
    __tablename__ = "activities"

    id = Column(Integer, primary_key=True, index=True)
    day_id = Column(Integer, ForeignKey("days.id"), nullable=False, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    position = Column(Integer, nullable=True)
    activity_date = Column(String, nullable=True)
    location = Column(String, nullable=True)
    category = Column(String, nullable=True)
    note = Column(Text, nullable=True)
    # JSON text, snapshot of the place lookup when the location was last set
    location_preview = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationship back to day
    day = relationship("Day", back_populates="activities")

    @property
    def preview(self):
        if not self.location_preview:
            return None
        return json.loads(self.location_preview)

    @preview.setter
    def preview(self, value):
        self.location_preview = json.dumps(value) if value is not None else None

    def to_dict(self):
        """Convert Activity instance to the camelCase payload clients expect"""
        return {
            "id": self.id,
            "dayId": self.day_id,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "position": self.position,
            "activityDate": self.activity_date,
            "location": self.location,
            "category": self.category,
            "note": self.note,
            "locationPreview": self.preview,
        }
