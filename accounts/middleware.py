from django.http import HttpResponse

from accounts.models import User

import logging

logger = logging.getLogger(__name__)

USER_HEADER = "X-User-Name"


# Development stand-in for a real login: the header names the acting user
class MockLoginUserMiddleware:
    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        if request.path.startswith("/api"):
            username = request.headers.get(USER_HEADER)
            if username:
                logger.info("Mock login for user: %s", username)
                try:
                    request.user = User.objects.get(username=username, is_active=True)
                except User.DoesNotExist:
                    return HttpResponse(
                        "User not found or invalid credentials.", status=401
                    )
        response = self.get_response(request)
        return response
