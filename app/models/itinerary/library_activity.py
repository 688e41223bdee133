from sqlalchemy import Column, Integer, String, DateTime, func
from app.core.database import Base


class LibraryActivity(Base):
    """Reusable activity template shown in the drag-source palette."""

    __tablename__ = "library_activities"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    type = Column(String, nullable=True)
    icon = Column(String, nullable=True)
    category = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "icon": self.icon,
            "category": self.category,
        }
