"""
Logging middleware for request/response logging
"""

import logging
import time

from flask import request, g

logger = logging.getLogger('realty_crm.requests')

class LoggingMiddleware:
    """Middleware for request logging"""

    def __init__(self, app):
        self.app = app
        self.setup_logging()

    def setup_logging(self):
        """Setup request logging"""
        @self.app.before_request
        def log_request_info():
            g.request_started = time.monotonic()
            if self.app.debug and request.path.startswith('/api/'):
                logger.debug(f"{request.method} {request.path} - {request.remote_addr}")

        @self.app.after_request
        def log_response_info(resp):
            if request.path.startswith('/api/'):
                elapsed_ms = (time.monotonic() - g.get('request_started', time.monotonic())) * 1000
                level = logging.WARNING if resp.status_code >= 500 else logging.INFO
                if self.app.debug or level == logging.WARNING:
                    logger.log(level, f"{request.method} {request.path} - {resp.status_code} ({elapsed_ms:.0f} ms)")
            return resp
