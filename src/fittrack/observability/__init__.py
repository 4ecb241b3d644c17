"""
fittrack.observability

Observability package.

Responsibilities:
- Structured logging configuration shared by the API service and the session core.
- Request context propagation for consistent log enrichment.
"""

# Package marker.
