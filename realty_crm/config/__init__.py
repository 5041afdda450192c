"""
Configuration package
"""

import os
from .settings import ConfigurationManager
from .roles import RoleConfig, ROLE_CONFIG
from .session import SessionManager

# Global configuration instance
config_manager = ConfigurationManager()

def load_config(app, config_name='development'):
    """Load configuration into Flask app"""
    
    # Detect hosted deployments
    if os.environ.get('RENDER'):
        config_name = 'production'
    
    basedir = os.path.abspath(os.path.dirname(__file__))
    
    configs = {
        'development': {
            'DEBUG': True,
            'SQLALCHEMY_DATABASE_URI': _get_dev_database_url(basedir),
            'SECRET_KEY': os.getenv('SECRET_KEY', 'dev-secret-key'),
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        },
        'testing': {
            'TESTING': True,
            'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
            'SECRET_KEY': 'test-secret-key',
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        },
        'production': {
            'DEBUG': False,
            'SQLALCHEMY_DATABASE_URI': _get_production_database_url(basedir),
            'SECRET_KEY': os.getenv('SECRET_KEY'),
            'SQLALCHEMY_TRACK_MODIFICATIONS': False,
            'SQLALCHEMY_ENGINE_OPTIONS': {
                'pool_pre_ping': True,
                'pool_recycle': 300,
            }
        }
    }
    
    app.config.update(configs.get(config_name, configs['development']))
    # Base64 file uploads travel in JSON bodies
    app.config['MAX_CONTENT_LENGTH'] = 10 * 1024 * 1024
    print(f"⚙️ Loaded {config_name} configuration")
    return config_name

def _get_dev_database_url(basedir):
    """Get development database URL"""
    db_path = os.path.join(basedir, "..", "..", "instance", "realty_crm.db")
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return f"sqlite:///{db_path}"

def _get_production_database_url(basedir):
    """Get production database URL with fallback"""
    database_url = os.getenv('DATABASE_URL')
    
    if database_url:
        # Hosted Postgres hands out postgres:// but SQLAlchemy 1.4+ requires postgresql://
        if database_url.startswith('postgres://'):
            database_url = database_url.replace('postgres://', 'postgresql://', 1)
        return database_url
    
    # Fallback to SQLite when no PostgreSQL is configured
    db_path = os.path.join(basedir, "..", "..", "instance", "realty_crm.db")
    os.makedirs(os.path.dirname(db_path), exist_ok=True)
    return f"sqlite:///{db_path}"

__all__ = ['config_manager', 'ConfigurationManager', 'RoleConfig', 'ROLE_CONFIG',
           'SessionManager', 'load_config']
