"""
================================================================================
Login Page Object
================================================================================

Locators for the login screen plus the actions and checks the login
scenarios need, expressed through the BasePage interaction contract.

NOTE:
  Selectors follow the demo application's ids and class names. Real projects
  should prefer stable `data-testid` attributes.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger

from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.page_base import PageBase


class LoginPage(PageBase):
    """Login page object."""

    URL_PATH = "/login"
    PAGE_TITLE = "Login"

    # Locators
    EMAIL_FIELD = Locator.id("email")
    PASSWORD_FIELD = Locator.id("password")
    LOGIN_BUTTON = Locator.id("login-button")
    REMEMBER_ME_CHECKBOX = Locator.id("remember-me")
    FORGOT_PASSWORD_LINK = Locator.link_text("Forgot Password")
    ERROR_MESSAGE = Locator.class_name("error-message")
    VALIDATION_ERROR = Locator.class_name("validation-error")
    EMAIL_FORMAT_ERROR = Locator.class_name("email-format-error")
    WELCOME_MESSAGE = Locator.class_name("welcome-message")
    LOGIN_FORM = Locator.id("login-form")
    LOGIN_PAGE_TITLE = Locator.tag_name("h1")

    @allure.step("Open login page")
    def open(self) -> "LoginPage":
        """Navigate to the login page and wait for it to load."""
        self.navigate()
        self.wait_for_page_load()
        logger.info(f"Navigated to login page: {self.url}")
        return self

    # =========================================================================
    # Actions
    # =========================================================================

    def enter_email(self, email: str) -> None:
        self.type(self.EMAIL_FIELD, email)
        logger.info(f"Entered email: {email}")

    def enter_password(self, password: str) -> None:
        self.type(self.PASSWORD_FIELD, password)
        logger.info("Entered password")

    def click_login_button(self) -> None:
        self.click(self.LOGIN_BUTTON)
        logger.info("Clicked login button")

    @allure.step("Login (email={email})")
    def login(self, email: str, password: str, remember_me: bool = False) -> None:
        """Fill the form and submit it."""
        self.enter_email(email)
        self.enter_password(password)
        if remember_me:
            self.check_remember_me()
        self.click_login_button()

    def check_remember_me(self) -> None:
        self.check_checkbox(self.REMEMBER_ME_CHECKBOX)
        logger.info("Checked 'Remember me' checkbox")

    def uncheck_remember_me(self) -> None:
        self.uncheck_checkbox(self.REMEMBER_ME_CHECKBOX)
        logger.info("Unchecked 'Remember me' checkbox")

    def click_forgot_password_link(self) -> None:
        self.click(self.FORGOT_PASSWORD_LINK)
        logger.info("Clicked 'Forgot Password' link")

    def clear_email_field(self) -> None:
        self.clear(self.EMAIL_FIELD)

    def clear_password_field(self) -> None:
        self.clear(self.PASSWORD_FIELD)

    def clear_all_fields(self) -> None:
        self.clear_email_field()
        self.clear_password_field()
        self.uncheck_remember_me()
        logger.info("Cleared all form fields")

    # =========================================================================
    # Reads
    # =========================================================================

    def get_email_field_value(self) -> str:
        return self.get_input_value(self.EMAIL_FIELD)

    def get_password_field_value(self) -> str:
        return self.get_input_value(self.PASSWORD_FIELD)

    def is_remember_me_checked(self) -> bool:
        return self.is_checked(self.REMEMBER_ME_CHECKBOX)

    def get_error_message(self) -> str:
        return self.get_text(self.ERROR_MESSAGE)

    def get_validation_error(self) -> str:
        return self.get_text(self.VALIDATION_ERROR)

    def get_email_format_error(self) -> str:
        return self.get_text(self.EMAIL_FORMAT_ERROR)

    def get_welcome_message(self) -> str:
        return self.get_text(self.WELCOME_MESSAGE)

    def get_login_page_title(self) -> str:
        return self.get_text(self.LOGIN_PAGE_TITLE)

    # =========================================================================
    # Checks
    # =========================================================================

    def is_error_message_displayed(self) -> bool:
        return self.is_element_displayed(self.ERROR_MESSAGE)

    def is_validation_error_displayed(self) -> bool:
        return self.is_element_displayed(self.VALIDATION_ERROR)

    def is_email_format_error_displayed(self) -> bool:
        return self.is_element_displayed(self.EMAIL_FORMAT_ERROR)

    def is_welcome_message_displayed(self) -> bool:
        return self.is_element_displayed(self.WELCOME_MESSAGE)

    def is_login_form_displayed(self) -> bool:
        return self.is_element_displayed(self.LOGIN_FORM)

    def is_email_field_enabled(self) -> bool:
        return self.is_element_enabled(self.EMAIL_FIELD)

    def is_password_field_enabled(self) -> bool:
        return self.is_element_enabled(self.PASSWORD_FIELD)

    def is_login_button_enabled(self) -> bool:
        return self.is_element_enabled(self.LOGIN_BUTTON)

    def is_login_page(self) -> bool:
        return "login" in self.session.current_url.lower()

    def wait_for_login_form(self) -> None:
        self.wait_for_element_visible(self.LOGIN_FORM)
        logger.info("Login form is visible")

    def wait_for_error_message(self) -> None:
        self.wait_for_element_visible(self.ERROR_MESSAGE)

    def wait_for_welcome_message(self) -> None:
        self.wait_for_element_visible(self.WELCOME_MESSAGE)

    def assert_login_page_loaded(self) -> None:
        """Hard assertion helper used by steps."""
        assert self.is_login_form_displayed(), "Login form should be visible"
