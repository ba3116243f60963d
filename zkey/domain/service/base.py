"""Base service class for domain services."""

from datetime import datetime
from typing import Callable

from zkey.domain.model.common import utc_now

Clock = Callable[[], datetime]

# Default clock of every time-dependent service
utcnow: Clock = utc_now


class Service:
    """Base class for domain services.

    Services hold logic spanning several entities or repositories.
    """
