"""
================================================================================
Forgot Password Page Object
================================================================================

Password reset request screen reached from the login page's
"Forgot Password" link.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import PageBase


class ForgotPasswordPage(PageBase):
    """Forgot password page object."""

    URL_PATH = "/forgot-password"
    PAGE_TITLE = "Forgot Password"

    EMAIL_FIELD = Locator.id("email")
    RESET_PASSWORD_BUTTON = Locator.id("reset-password-button")
    CONFIRMATION_MESSAGE = Locator.class_name("confirmation-message")

    def is_forgot_password_page(self) -> bool:
        return "forgot" in self.session.current_url.lower()

    @allure.step("Request password reset")
    def request_reset(self, email: str = "") -> None:
        """Optionally fill the email and press the reset button."""
        if email:
            self.type(self.EMAIL_FIELD, email)
        self.click_reset_password_button()

    def click_reset_password_button(self) -> None:
        self.click(self.RESET_PASSWORD_BUTTON)
        logger.info("Clicked 'Reset Password' button")

    def is_confirmation_displayed(self) -> bool:
        return self.is_element_displayed(self.CONFIRMATION_MESSAGE)
