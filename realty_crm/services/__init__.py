"""
Services package
Exports all business logic services
"""

from .earning import EarningRule, EarningRuleResolver, EarningCalculator, parse_rule_map
from .payable import PayableEntry, PayableAggregator, PayableService
from .settings_service import SettingsService
from .payment_gateway import PaymentGatewayService
from .database import DatabaseService
from .user_service import UserService, PartnerService
from .property_service import PropertyService
from .lead_service import LeadService, AppointmentService
from .wallet_service import WalletService
from .reward_service import RewardService
from .support_service import SupportService
from .team_service import TeamService
from .file_service import FileService
from .otp_service import OTPService, otp_service
from .analytics import AnalyticsService
from .report_service import ReportService

__all__ = [
    'EarningRule', 'EarningRuleResolver', 'EarningCalculator', 'parse_rule_map',
    'PayableEntry', 'PayableAggregator', 'PayableService',
    'SettingsService', 'PaymentGatewayService', 'DatabaseService',
    'UserService', 'PartnerService', 'PropertyService',
    'LeadService', 'AppointmentService', 'WalletService', 'RewardService',
    'SupportService', 'TeamService', 'FileService', 'OTPService', 'otp_service',
    'AnalyticsService', 'ReportService'
]
