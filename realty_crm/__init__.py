"""
Realty CRM Application Package
Entry point for the Flask application with factory pattern
"""

import os
from flask import Flask
from flask_cors import CORS

def create_app(config_name='development'):
    """Application factory function"""

    app = Flask(__name__)

    # Load configuration FIRST
    from realty_crm.config import load_config
    config_name = load_config(app, config_name)

    # Session cookies depend on the loaded configuration
    configure_session_cookies(app, config_name)

    # Setup CORS for the frontend origins
    setup_cors(app)

    # Initialize database
    from realty_crm.models import init_db
    init_db(app)

    # Setup middlewares
    from realty_crm.middlewares import setup_middlewares
    setup_middlewares(app)

    # Register controllers
    from realty_crm.controllers import register_controllers
    register_controllers(app)

    return app

def configure_session_cookies(app, config_name):
    """Configure the session cookie for the frontend"""

    # The frontend is served from another origin in production
    if config_name == 'production' or os.getenv('CROSS_SITE_COOKIES') == 'true':
        app.config['SESSION_COOKIE_SAMESITE'] = 'None'
        app.config['SESSION_COOKIE_SECURE'] = True  # Requires HTTPS
        app.config['SESSION_COOKIE_HTTPONLY'] = True
        print("✓ Configured cross-site session cookies")
    else:
        app.config['SESSION_COOKIE_SAMESITE'] = 'Lax'
        app.config['SESSION_COOKIE_SECURE'] = False
        app.config['SESSION_COOKIE_HTTPONLY'] = True
        print("✓ Configured same-site session cookies")

def setup_cors(app):
    """Setup CORS with credentials support"""

    origins = os.getenv('CORS_ORIGINS', '*')

    if origins == '*':
        allowed_origins = ["http://localhost:3000", "http://localhost:5000"]
    else:
        allowed_origins = [o.strip() for o in origins.split(',') if o.strip()]

    CORS(app, resources={
        r"/api/*": {
            "origins": allowed_origins,
            "supports_credentials": True,
            "allow_headers": ["Content-Type", "Authorization"],
            "methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"]
        },
        r"/(login|logout|register/.*)": {
            "origins": allowed_origins,
            "supports_credentials": True
        }
    }, supports_credentials=True)

    print(f"✓ Configured CORS for origins: {allowed_origins}")
