"""
Configuration manager for application settings
"""

import os
from typing import Dict

class ConfigurationManager:
    """Manages application-wide settings read from the environment"""
    
    def __init__(self):
        self._app_config = self._initialize_app_config()
    
    def _initialize_app_config(self) -> Dict:
        """Initialize application-wide configuration"""
        return {
            # Payment gateway
            'PHONEPE_CLIENT_ID': os.getenv('PHONEPE_CLIENT_ID', ''),
            'PHONEPE_CLIENT_SECRET': os.getenv('PHONEPE_CLIENT_SECRET', ''),
            'PHONEPE_SALT_INDEX': int(os.getenv('PHONEPE_SALT_INDEX', '1')),
            'PHONEPE_PAY_URL': os.getenv('PHONEPE_PAY_URL', 'https://api.phonepe.com/apis/hermes/pg/v1/pay'),
            'PHONEPE_PAY_PATH': '/pg/v1/pay',
            # The gateway requires a mobile number on every pay request
            'PHONEPE_MOBILE_NUMBER': os.getenv('PHONEPE_MOBILE_NUMBER', '9999999999'),
            'PAYMENT_TIMEOUT_SECONDS': float(os.getenv('PAYMENT_TIMEOUT_SECONDS', '30')),
            'BASE_URL': os.getenv('BASE_URL', 'http://localhost:5000'),
            
            # Wallet and rewards
            'MIN_WITHDRAWAL_AMOUNT': float(os.getenv('MIN_WITHDRAWAL_AMOUNT', '100')),
            'REWARD_POINT_VALUE': float(os.getenv('REWARD_POINT_VALUE', '1.0')),
            
            # OTP
            'OTP_TTL_SECONDS': int(os.getenv('OTP_TTL_SECONDS', '300')),
            
            'CURRENCY_SYMBOL': '₹',
        }
    
    def get_app_config(self, key: str, default=None):
        """Get application configuration value"""
        return self._app_config.get(key, default)
    
    def set_app_config(self, key: str, value):
        """Override a configuration value at runtime"""
        self._app_config[key] = value
