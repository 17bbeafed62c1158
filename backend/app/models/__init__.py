# app/models/__init__.py
"""
Database models module initialization.
Exports all Tortoise ORM models for convenient imports.

Models exported:
- Interview: Recorded birthday interview with transcription status and answers
"""
from .interview import Interview
