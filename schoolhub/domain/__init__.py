"""Domain layer: entities and errors shared by every use case."""
