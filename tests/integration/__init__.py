"""
Integration tests for the Casting Director backend.

Test components against real external services:
- Actor fee cache on a real Redis (marked with @pytest.mark.integration)
"""
