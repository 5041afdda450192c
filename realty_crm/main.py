"""
Main application class - orchestrates all components
"""

import logging
import os

from realty_crm import create_app

def configure_logging(debug=False):
    """Root logging for the running server"""
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, os.getenv('LOG_LEVEL', 'INFO').upper(), logging.INFO),
        format='%(asctime)s %(levelname)s [%(name)s] %(message)s'
    )


class RealtyCRMApp:
    """Main application class that orchestrates all components"""

    def __init__(self, config_name='development'):
        configure_logging(debug=config_name == 'development')
        self.app = create_app(config_name)

    def initialize_database(self):
        """Initialize database with tables, admin account and default settings"""
        from realty_crm.services.database import DatabaseService

        with self.app.app_context():
            DatabaseService().initialize()

    def run(self, debug=True, host='0.0.0.0', port=5000):
        """Run the application"""
        self.initialize_database()

        print("🏠 Realty CRM starting...")
        print(f"🌐 API available at http://{host}:{port}")

        try:
            self.app.run(
                debug=debug,
                host=host,
                port=port,
                use_reloader=False
            )
        except KeyboardInterrupt:
            print("\n🛑 Shutting down gracefully...")
