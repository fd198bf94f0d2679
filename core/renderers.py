"""
Core — Response Renderer

Wraps successful responses in the envelope the presentation layer
expects:
  { "success": true, "data": ..., "meta": ... }

Paginated listings put the page in "data" and the paging links in
"meta". Error responses are already enveloped by the exception handler
and pass through untouched.

@file core/renderers.py
"""

from rest_framework.renderers import JSONRenderer


def _wrap(data):
    if isinstance(data, dict) and 'success' in data:
        return data
    if isinstance(data, dict) and 'results' in data:
        return {
            'success': True,
            'data': data['results'],
            'meta': {
                'count': data.get('count'),
                'next': data.get('next'),
                'previous': data.get('previous'),
            },
        }
    return {'success': True, 'data': data}


class StandardJSONRenderer(JSONRenderer):
    """Envelope-wrapping JSON renderer."""

    def render(self, data, accepted_media_type=None, renderer_context=None):
        response = renderer_context.get('response') if renderer_context else None

        if response is not None and response.status_code >= 400:
            return super().render(data, accepted_media_type, renderer_context)

        return super().render(_wrap(data), accepted_media_type, renderer_context)
