"""Pydantic schemas for the render target."""
