from .trips.trip_model import Trip
from .itinerary.day_model import Day
from .itinerary.activity import Activity
from .itinerary.library_activity import LibraryActivity
