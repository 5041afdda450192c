"""
Role definitions: partner roles, menus and team hierarchy
"""

from typing import Dict, List, Optional

class RoleConfig:
    """Configuration for the user roles of the marketplace"""
    
    def __init__(self, partner_roles: Dict[str, str], addable_roles: Dict[str, List[str]],
                 login_redirects: Dict[str, str], menus: Dict[str, List[Dict[str, str]]]):
        self.partner_roles = partner_roles
        self.addable_roles = addable_roles
        self.login_redirects = login_redirects
        self.menus = menus
    
    def is_partner_role(self, role: str) -> bool:
        """Check if role earns commission on closed deals"""
        return role in self.partner_roles
    
    def get_role_label(self, role: str) -> str:
        """Human readable label for a role"""
        if role in self.partner_roles:
            return self.partner_roles[role]
        return (role or '').replace('_', ' ').title()
    
    def get_addable_roles(self, role: str) -> List[str]:
        """Roles a team lead of this role may recruit into their team"""
        return self.addable_roles.get(role, [])
    
    def get_login_redirect(self, role: str) -> str:
        """Landing page after a successful login"""
        return self.login_redirects.get(role, '/dashboard')
    
    def get_menu(self, role: str) -> List[Dict[str, str]]:
        """Navigation items visible to a role"""
        if role == 'admin':
            return self.menus['common'] + self.menus['admin']
        if self.is_partner_role(role):
            return self.menus['common'] + self.menus['partner']
        return self.menus.get(role, self.menus['common'])

    def normalize_role(self, role: Optional[str]) -> Optional[str]:
        """Normalize role strings like 'Super Affiliate' to 'super_affiliate'"""
        if not role:
            return None
        return role.strip().lower().replace(' ', '_').replace('-', '_')

ROLE_CONFIG = RoleConfig(
    partner_roles={
        'affiliate': 'Affiliate Partner',
        'super_affiliate': 'Super Affiliate Partner',
        'associate': 'Associate Partner',
        'channel': 'Channel Partner',
        'franchisee': 'Franchisee',
    },
    addable_roles={
        'franchisee': ['channel', 'associate', 'super_affiliate', 'affiliate'],
        'channel': ['associate', 'super_affiliate', 'affiliate'],
        'associate': ['super_affiliate', 'affiliate'],
    },
    login_redirects={
        'seller': '/dashboard',
        'customer': '/listings/list',
        'user': '/listings',
    },
    menus={
        'common': [
            {'href': '/dashboard', 'label': 'Dashboard'},
            {'href': '/properties', 'label': 'Properties'},
        ],
        'admin': [
            {'href': '/manage-partner', 'label': 'Manage Partner'},
            {'href': '/manage-seller', 'label': 'Manage Seller'},
            {'href': '/manage-lead', 'label': 'Manage Lead'},
            {'href': '/manage-deals', 'label': 'Manage Deals'},
            {'href': '/manage-customer', 'label': 'Manage Customer'},
            {'href': '/manage-support', 'label': 'Manage Support'},
            {'href': '/wallet-billing', 'label': 'Wallet & Billing'},
        ],
        'partner': [
            {'href': '/marketing-kit', 'label': 'Marketing Kits'},
            {'href': '/leads', 'label': 'Leads'},
            {'href': '/team-management', 'label': 'Team Management'},
            {'href': '/wallet-billing', 'label': 'Wallet & Billing'},
            {'href': '/support-ticket', 'label': 'Support'},
        ],
        'seller': [
            {'href': '/dashboard', 'label': 'Dashboard'},
            {'href': '/listings/my-properties', 'label': 'My Properties'},
            {'href': '/leads', 'label': 'Leads'},
            {'href': '/wallet-billing/withdrawal', 'label': 'Withdrawal'},
        ],
        'customer': [
            {'href': '/listings/list', 'label': 'Listings'},
            {'href': '/my-consultant', 'label': 'My Consultant'},
        ],
        'user': [
            {'href': '/listings', 'label': 'Listings'},
        ],
    },
)
