"""
Feature modules for GPX Monster.

Each feature is a self-contained module with:
- models.py - Domain dataclasses
- schemas.py - Pydantic schemas
- service.py - Business logic
"""
