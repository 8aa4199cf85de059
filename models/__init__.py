from .Trip import Trip
from .Participant import Participant
from .Activity import Activity
from .Link import Link

__all__ = ["Trip", "Participant", "Activity", "Link"]
