"""Domain exceptions raised by repositories and services."""


class EntityNotFoundError(Exception):
    """Raised when an entity looked up by id does not exist."""

    def __init__(self, entity_type: str, entity_id: int | str):
        self.entity_type = entity_type
        self.entity_id = entity_id
        super().__init__(f"{entity_type} not found - id: {entity_id}")
