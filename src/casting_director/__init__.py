"""
Casting Director backend.

Secure proxy between the casting game frontend and the Gemini API:
- Book analysis for film adaptation (characters, budgets, studio)
- Actor fee estimates, cached per actor for 30 days
- Simulated box office and critical reception

Architecture: FastAPI + resilient Gemini client (retry/backoff) + document store cache
"""

__version__ = "0.1.0"
