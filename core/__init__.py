# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic:
# - access.py: Chat participation and commissioner ownership rules
# - models/: Pydantic schemas for data validation
# - services/: Chat, commissioner and order services
#
# Services receive their persistence handle explicitly, so they can be
# exercised in tests without a database.
# =============================================================================
