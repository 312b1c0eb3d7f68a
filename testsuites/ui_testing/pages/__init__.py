"""
================================================================================
Page Objects
================================================================================

Page Object Model implementations for application pages.

Each page class encapsulates:
    - Element locators
    - Page-specific actions
    - Verification methods

Author: Automation Team
License: MIT
================================================================================
"""

from .login_page import LoginPage
from .forgot_password_page import ForgotPasswordPage

__all__ = [
    "LoginPage",
    "ForgotPasswordPage",
]
