from rest_framework import status
from rest_framework.response import Response


def api_response(message: str, data=None, status_code=status.HTTP_200_OK):
    """
    Small helper to standardize success responses across the apps.
    Always returns: {"status": "success", "message": ..., "data": ...}
    """
    body = {"status": "success", "message": message}
    if data is not None:
        body["data"] = data
    return Response(body, status=status_code)
