from rest_framework.response import Response
from rest_framework import status


def api_error(message: str, status_code=status.HTTP_400_BAD_REQUEST, **extra):
    """
    Small helper to standardize error responses across the registry apps.
    Always returns: {"error": "<message>", ...extra} with the given status code.
    """
    return Response({"error": message, **extra}, status=status_code)


def client_ip(request):
    forwarded = request.META.get("HTTP_X_FORWARDED_FOR")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.META.get("REMOTE_ADDR")
