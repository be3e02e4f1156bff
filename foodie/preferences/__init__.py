"""
Preference extraction package.

Responsibilities:
- Classify raw lines and structured fields into preference categories.
- Aggregate duplicates into counted entries.
- Compile a size-bounded summary for prompting.
"""
