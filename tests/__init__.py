# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Cafe Places API:
# - test_models.py: Unit tests for Pydantic model validation
# - test_place_service.py: Place lifecycle rules (auth, ownership, uniqueness)
# - test_place_store.py: In-memory and Supabase place stores
# - test_auth.py: Session token resolution
# - test_places_api.py: HTTP status codes and redirects for every endpoint
#
# Run tests with: pytest
# =============================================================================
