from rest_framework.authentication import BaseAuthentication

from accounts.middleware import USER_HEADER


class MockLoginAuthentication(BaseAuthentication):
    """
    Hands the user resolved by MockLoginUserMiddleware to DRF.

    No session is created, so unsafe methods need no CSRF token.
    """

    def authenticate(self, request):
        user = getattr(request._request, "user", None)
        if user is None or not user.is_authenticated:
            return None
        return (user, None)

    def authenticate_header(self, request):
        # Makes DRF answer 401 rather than 403 for anonymous requests
        return USER_HEADER
