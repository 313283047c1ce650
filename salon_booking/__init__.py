"""Multi-tenant salon booking: availability engine, booking flow and collaborators."""

__version__ = "0.1.0"
