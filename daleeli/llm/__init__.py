"""
Gemini integration layer.

Responsibilities:
- Manage Gemini API configuration and credentials.
- Issue the grounded recommendation call (Google Maps + Google Search tools).
- Issue the structured-output autocomplete call.
- Return raw grounding data; normalization happens in ``recommendations``.
"""
