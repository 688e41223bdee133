from app.core.config import settings
from app.core.exceptions import PlaceLookupError
from app.schemas.itineraries.activity import ActivityCreate
from app.services.itineraries.itinerary_service import ItineraryService

TRIP_ID = settings.DEFAULT_TRIP_ID


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


async def test_empty_itinerary(client):
    response = await client.get("/api/itinerary")

    assert response.status_code == 200
    assert response.json() == {
        "tripInfo": {"title": "Our Hawaiian Dream Vacation", "dates": "Dec 15-22, 2024", "islands": "Oahu"},
        "itinerary": [],
    }


async def test_itinerary_uses_client_field_names(client, db):
    service = ItineraryService()
    day = await service.add_day(db, TRIP_ID)
    await service.add_activity(
        db, TRIP_ID,
        ActivityCreate.model_validate({"dayId": day.id, "name": "Snorkel", "type": "beach", "activityDate": "Dec 15"}),
    )

    body = (await client.get("/api/itinerary")).json()

    assert body["itinerary"][0]["dayNumber"] == 1
    activity = body["itinerary"][0]["activities"][0]
    assert activity["dayId"] == day.id
    assert activity["activityDate"] == "Dec 15"
    assert activity["locationPreview"] is None


async def test_unknown_trip_is_404(client):
    response = await client.get("/api/itinerary", params={"trip_id": 99})

    assert response.status_code == 404
    assert response.json()["code"] == "not_found"


async def test_summary(client, db):
    service = ItineraryService()
    day = await service.add_day(db, TRIP_ID)
    await service.add_activity(db, TRIP_ID, ActivityCreate.model_validate({"dayId": day.id, "name": "Poke", "type": "restaurant"}))

    response = await client.get("/api/summary")

    assert response.json() == {"total_days": 1, "total_activities": 1, "beach_count": 0, "restaurant_count": 1}


async def test_library_listing(client, handlers):
    await handlers.add_library_activity("alice", {"name": "Waikiki Beach", "type": "beach"})

    response = await client.get("/api/library-activities")

    assert [item["name"] for item in response.json()] == ["Waikiki Beach"]


async def test_search_locations(client, place_lookup):
    place_lookup.suggestions = [{"place_id": "p1", "name": "Waikiki Beach", "formatted": "Waikiki Beach, HI", "secondary": "HI"}]

    response = await client.get("/api/search-locations", params={"query": "waik"})

    assert response.json() == place_lookup.suggestions
    assert place_lookup.calls == ["waik"]


async def test_place_details_by_location(client, place_lookup):
    place_lookup.result = {"name": "Diamond Head", "rating": 4.8}

    response = await client.get("/api/place-details", params={"location": "Diamond Head"})

    assert response.json() == {"success": True, "placeDetails": {"name": "Diamond Head", "rating": 4.8}}


async def test_place_details_failure_is_not_an_error(client, place_lookup):
    place_lookup.error = PlaceLookupError("down")

    response = await client.get("/api/place-details", params={"place_id": "abc"})

    assert response.status_code == 200
    assert response.json() == {"success": False, "placeDetails": None}


async def test_place_details_needs_a_parameter(client):
    response = await client.get("/api/place-details")
    assert response.status_code == 422
