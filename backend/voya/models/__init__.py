from voya.models.itinerary import Itinerary

__all__ = [
    "Itinerary",
]
