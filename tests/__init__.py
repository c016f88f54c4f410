# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Marketplace API:
# - test_access.py: Chat participation and commissioner ownership rules
# - test_chat_service.py / test_commissioner_service.py / test_order_service.py
# - test_api.py / test_websocket.py: HTTP and WebSocket endpoints
#
# Run tests with: pytest
# =============================================================================
