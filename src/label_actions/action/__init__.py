"""Label action components.

- Settings loaded from the GitHub Actions environment
- Structured logging
- Config resolution, effect dispatch and the run controller
"""
