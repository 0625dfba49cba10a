# backend/modules/suggestion_boxes/__init__.py

"""
Suggestion Boxes Module

Administrators create suggestion boxes and share their submission link.
Anyone holding the link can submit a suggestion, optionally with a 1-5 star
rating. The owning administrator lists, rates and exports the suggestions.

Key Components:
- Models: SuggestionBox and Suggestion tables (suggestions cascade with their box)
- Services: access control, box management, submissions, CSV export
- Routers: API endpoints for boxes, suggestions and exports
"""

__version__ = "1.0.0"
