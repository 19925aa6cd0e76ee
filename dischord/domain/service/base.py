"""Base service class for domain services."""

from dischord.domain.store import Store


class Service:
    """Base class for all domain services.

    Services sit between the interface layer and the Store: they validate
    caller input, generate identifiers and timestamps, and log.
    """

    def __init__(self, store: Store) -> None:
        """Initialize service.

        Args:
            store: Shared Store instance
        """
        self.store = store
