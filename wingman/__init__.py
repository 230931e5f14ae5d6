"""
Wingman backend.

Local persistence for self-improvement exercises, journal reflections and
training journeys, plus a small FastAPI surface that consumes it.
"""
