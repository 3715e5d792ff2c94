from django.http import JsonResponse


class JsonNotFoundMiddleware:
    """Return the JSON error envelope for paths that match no route.

    API views already answer 404 in JSON; this only rewrites Django's
    HTML "page not found" responses.
    """
    API_PREFIXES = ('/api/',)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        response = self.get_response(request)
        path = request.path or ''
        if (
            response.status_code == 404
            and any(path.startswith(p) for p in self.API_PREFIXES)
            and 'application/json' not in response.get('Content-Type', '')
        ):
            return JsonResponse({'status': 'error', 'message': 'Route not found'}, status=404)
        return response
