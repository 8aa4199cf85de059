from . import trips
from . import participants
from . import trip_invitations
from . import activities
from . import links

__all__ = [
    "trips",
    "participants",
    "trip_invitations",
    "activities",
    "links",
]
