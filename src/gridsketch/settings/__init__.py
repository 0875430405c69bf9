"""User settings: packaged value sets, the pydantic schema and its store."""
