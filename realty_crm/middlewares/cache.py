"""
Cache middleware for response caching headers
"""

from flask import request

# Stored files never change once uploaded
FILE_DOWNLOAD_MAX_AGE = 24 * 60 * 60

class CacheMiddleware:
    """Middleware for handling caching headers"""

    def __init__(self, app):
        self.app = app
        self.setup_cache_headers()

    def setup_cache_headers(self):
        """Setup cache control headers for API and auth routes"""
        @self.app.after_request
        def add_cache_headers(resp):
            if request.path.startswith('/api/files/') and request.path.endswith('/download'):
                if resp.status_code == 200:
                    resp.headers['Cache-Control'] = f'private, max-age={FILE_DOWNLOAD_MAX_AGE}'
            elif request.path.startswith(('/api/', '/login', '/logout', '/register')):
                resp.headers['Cache-Control'] = 'no-store, no-cache, must-revalidate, max-age=0'
                resp.headers['Pragma'] = 'no-cache'
                resp.headers['Expires'] = '0'
            return resp
