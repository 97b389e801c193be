# authx/authentication.py
# DRF authentication class that accepts the JWT from the header or the auth cookie

import logging

from django.conf import settings
from rest_framework import exceptions
from rest_framework.authentication import CSRFCheck
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken

logger = logging.getLogger("showcase")


class CookieJWTAuthentication(JWTAuthentication):
    """
    SimpleJWT authentication that also reads the access token cookie.

    This authenticator:
    1. Uses the "Authorization: Bearer <token>" header when present
    2. Otherwise falls back to the cookie set by LoginView, with the same
       CSRF check SessionAuthentication applies to unsafe methods
    3. Returns None (anonymous) when neither is present
    """

    def authenticate(self, request):
        header = self.get_header(request)

        if header is not None:
            # Explicit credentials: invalid tokens are a hard 401
            return super().authenticate(request)

        raw_token = request.COOKIES.get(settings.AUTH_COOKIE_NAME)
        if not raw_token:
            return None

        try:
            validated_token = self.get_validated_token(raw_token.encode())
        except InvalidToken as e:
            # Stale cookie: treat as anonymous, protected views still answer 401
            logger.debug(f"Ignoring invalid auth cookie: {e}")
            return None

        user = self.get_user(validated_token)
        self.enforce_csrf(request)
        return user, validated_token

    def enforce_csrf(self, request):
        """Browsers send the cookie on their own, so cookie auth needs a CSRF token."""
        def dummy_get_response(request):  # pragma: no cover
            return None

        check = CSRFCheck(dummy_get_response)
        # populates request.META['CSRF_COOKIE'] for process_view
        check.process_request(request)
        reason = check.process_view(request, None, (), {})
        if reason:
            raise exceptions.PermissionDenied(f"CSRF Failed: {reason}")
