"""ORM model registry: imports every mapper module so each class is
registered with Base.metadata before Alembic or SQLAlchemy runs.
"""

from crudkit.infrastructure.persistence.models.entity import AuditedEntity, NamedQuery
from crudkit.infrastructure.persistence.models.people import PERSON_NAMED_QUERIES, Person
from crudkit.infrastructure.persistence.models.projects import (
    PROJECT_NAMED_QUERIES,
    Project,
)

__all__ = [
    # Base
    "AuditedEntity",
    "NamedQuery",
    # People
    "Person",
    "PERSON_NAMED_QUERIES",
    # Projects
    "Project",
    "PROJECT_NAMED_QUERIES",
]
