"""Pydantic schemas shared across the registry, retriever, engine and dispatcher."""
