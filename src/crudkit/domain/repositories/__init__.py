"""Domain repository interfaces.

The abstraction is defined here with abc.ABC and @abstractmethod.  The
concrete implementation lives in crudkit/infrastructure/persistence/ and is
wired at the application boundary via dependency injection.
"""

from .base import CrudRepository

__all__ = ["CrudRepository"]
