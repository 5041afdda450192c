"""
Security middleware for response headers
"""

from flask import request

class SecurityMiddleware:
    """Middleware for security headers"""

    def __init__(self, app):
        self.app = app
        self.setup_security_headers()

    def setup_security_headers(self):
        """Setup security headers"""
        @self.app.after_request
        def add_security_headers(resp):
            resp.headers['X-Content-Type-Options'] = 'nosniff'
            resp.headers['X-XSS-Protection'] = '1; mode=block'
            resp.headers['X-Frame-Options'] = 'DENY'
            resp.headers['Referrer-Policy'] = 'strict-origin-when-cross-origin'

            # Uploaded files are served with their stored content type
            if request.path.startswith('/api/files/'):
                resp.headers['Content-Security-Policy'] = "default-src 'none'"

            # Only add HTTPS headers if not in development
            if not self.app.debug and not self.app.testing:
                resp.headers['Strict-Transport-Security'] = 'max-age=31536000; includeSubDomains'

            return resp
