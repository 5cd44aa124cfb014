"""Domain layer: entities and services for multi-state data preparation."""
