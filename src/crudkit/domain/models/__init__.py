"""Domain model package.

All domain objects are pure Python / Pydantic models with no ORM or
infrastructure dependencies.  Import from this package to avoid coupling
application code to individual module paths.
"""

from .entity import Entity
from .enums import TextField, TimeStamp
from .people import Person
from .projects import Project
from .timestamps import from_epoch_millis, to_epoch_millis, utc_now

__all__ = [
    # enums
    "TextField",
    "TimeStamp",
    # entities
    "Entity",
    "Person",
    "Project",
    # timestamps
    "from_epoch_millis",
    "to_epoch_millis",
    "utc_now",
]
