"""
Controllers package
Exports all route controllers and registration function
"""

from .auth import AuthController
from .dashboard import DashboardController
from .partners_controller import PartnersController
from .properties_controller import PropertiesController
from .leads_controller import LeadsController
from .payables_controller import PayablesController
from .payment_controller import PaymentController
from .wallet_controller import WalletController
from .support_controller import SupportController, TeamController, FileController, OTPController
from .content_controller import RequirementsController, ResourcesController, MessagesController

def register_controllers(app):
    """Register all controllers with the Flask app"""
    AuthController(app)
    DashboardController(app)
    PartnersController(app)
    PropertiesController(app)
    LeadsController(app)
    PayablesController(app)
    PaymentController(app)
    WalletController(app)
    SupportController(app)
    TeamController(app)
    FileController(app)
    OTPController(app)
    RequirementsController(app)
    ResourcesController(app)
    MessagesController(app)
    print("All controllers registered successfully")


__all__ = [
    'register_controllers',
    'AuthController', 'DashboardController', 'PartnersController',
    'PropertiesController', 'LeadsController', 'PayablesController',
    'PaymentController', 'WalletController', 'SupportController',
    'TeamController', 'FileController', 'OTPController',
    'RequirementsController', 'ResourcesController', 'MessagesController'
]
