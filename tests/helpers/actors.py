"""Actor headers for API tests."""

ADMIN_HEADERS = {"X-Actor-Id": "admin-1", "X-Actor-Role": "ADMIN"}
EMPLOYEE_HEADERS = {"X-Actor-Id": "clerk-1", "X-Actor-Role": "EMPLOYEE"}
EXTERNAL_HEADERS = {"X-Actor-Id": "party-1", "X-Actor-Role": "EXTERNAL"}
