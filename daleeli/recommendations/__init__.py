"""
Grounded recommendation pipeline.

Responsibilities:
- Build localized prompts and grounding configuration from query + location.
- Normalize grounding chunks into deduplicated, enriched business listings.
- Fetch typed autocomplete suggestions.
- Order, filter and truncate listings for display.
- Track per-session search results and errors.
"""
