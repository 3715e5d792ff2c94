from rest_framework import status as http_status
from rest_framework.response import Response


def success(data=None, *, message=None, status=http_status.HTTP_200_OK) -> Response:
    """Wrap a payload in the ``{"status": "success", ...}`` envelope."""
    body = {'status': 'success'}
    if data is not None:
        body['data'] = data
    if message is not None:
        body['message'] = message
    return Response(body, status=status)
