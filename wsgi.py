"""
WSGI entry point for production deployment
"""

import os
from dotenv import load_dotenv

# Load environment variables before the settings are read
load_dotenv()

from realty_crm.main import RealtyCRMApp

# Create application for production
app_instance = RealtyCRMApp('production')

print(" Initializing production database...")
try:
    app_instance.initialize_database()
    print(" Database ready")
except Exception as e:
    print(f" Database setup: {e}")

# Export the Flask app for WSGI servers
app = app_instance.app

if __name__ == '__main__':
    # For local testing
    app.run(host='0.0.0.0', port=int(os.getenv('PORT', 5000)))
