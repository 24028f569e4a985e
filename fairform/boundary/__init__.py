"""Boundary adapters: database persistence and OpenAI clients."""
