"""
Development entry point for the Realty CRM application
"""

import os
from dotenv import load_dotenv

# Load environment variables from .env file before the settings are read
load_dotenv()

from realty_crm.main import RealtyCRMApp

def main():
    """Main function to run the development server"""
    app = RealtyCRMApp('development')

    print(" Realty CRM starting in development mode...")
    print(" Admin login comes from ADMIN_EMAIL / ADMIN_PASSWORD")

    app.run(
        debug=True,
        host='0.0.0.0',
        port=int(os.getenv('PORT', 5000))
    )

if __name__ == '__main__':
    main()
