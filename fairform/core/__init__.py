"""Core domain logic: errors, retry policy, intake schemas and session lifecycle."""
