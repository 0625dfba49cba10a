# backend/modules/suggestion_boxes/tests/__init__.py

"""
Test suite for the suggestion boxes module.

Covers the access-control decisions, the box, suggestion and export
services, and the HTTP endpoints end to end against an in-memory SQLite
database.
"""
