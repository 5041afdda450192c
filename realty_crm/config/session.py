"""
Session management for the signed-in user
"""

from typing import Optional

class SessionManager:
    """Manages session-specific data for the current user"""
    
    @staticmethod
    def get_current_user_id(session) -> Optional[str]:
        """Get the signed-in user's id from session"""
        return session.get('user_id')
    
    @staticmethod
    def sign_in(session, user) -> None:
        """Store user identity in session"""
        session.clear()
        session['user_id'] = user.id
        session['role'] = user.role
    
    @staticmethod
    def sign_out(session) -> None:
        """Clear session"""
        session.clear()
