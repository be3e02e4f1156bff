"""
Suggestion backend integration layer.

Responsibilities:
- Manage Groq API configuration and credentials.
- Embed the compiled preference summary in a fixed JSON-only prompt.
- Call Groq to produce suggestions in place of the local engine.
- Return nothing on any failure so the caller can fall back to local generation.
"""
