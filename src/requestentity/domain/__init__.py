"""Domain layer: input lookup and the field resolution policy."""
