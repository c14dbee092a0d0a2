"""Domain layer - pydantic value objects exposed to callers."""
