"""Core data model: synsets, typed relations, and the error taxonomy."""
