# Package exports - these allow cleaner imports like:
# from storefront.auth import require_admin, jwt_validator
from storefront.auth.jwt_validator import jwt_validator
from storefront.auth.dependencies import AUTH_COOKIE, extract_token, require_admin
