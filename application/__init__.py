"""
Application Layer for the workout session engine.

This package contains:
- ports/: Abstract repository and health-store interfaces (what the domain needs)
- use_cases/: Session lifecycle, history, statistics and personal records
- exceptions.py: Error taxonomy raised by the session lifecycle
"""
