"""
Recommendation engine.

Responsibilities:
- Build a weighted candidate pool from aggregated preferences.
- Sample a diverse batch and explain each pick.
- Orchestrate the optional external backend with local fallback.
- Return structured suggestions ready for API serialisation.
"""
