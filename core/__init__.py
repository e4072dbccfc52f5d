# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the users business logic:
# - models/: Pydantic schemas (User, envelopes)
# - stores/: Storage backends behind the UserStore interface
# - services/: UserService (validation, error classification)
#
# Apart from the exception types in app/exceptions.py, nothing here knows
# about HTTP. This keeps the logic testable and reusable.
# =============================================================================
