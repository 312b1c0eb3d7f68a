"""
================================================================================
Login Step Definitions
================================================================================

Steps for the login and password-reset scenarios.

================================================================================
"""

from __future__ import annotations

from loguru import logger
from pytest_bdd import given, parsers, then, when

from testsuites.ui_testing.pages.forgot_password_page import ForgotPasswordPage
from testsuites.ui_testing.pages.login_page import LoginPage


@given("I am on the login page")
def i_am_on_the_login_page(login_page: LoginPage):
    login_page.open()


@when(parsers.parse('I enter "{email}" in the email field'))
def i_enter_in_the_email_field(login_page: LoginPage, email: str):
    login_page.enter_email(email)


@when(parsers.parse('I enter "{password}" in the password field'))
def i_enter_in_the_password_field(login_page: LoginPage, password: str):
    login_page.enter_password(password)


@when("I click the login button")
def i_click_the_login_button(login_page: LoginPage):
    login_page.click_login_button()


@when("I click the login button without entering credentials")
def i_click_the_login_button_without_entering_credentials(login_page: LoginPage):
    login_page.click_login_button()
    logger.info("Clicked login button without entering credentials")


@when(parsers.parse('I check the "{checkbox_name}" checkbox'))
def i_check_the_checkbox(login_page: LoginPage, checkbox_name: str):
    if checkbox_name.lower() != "remember me":
        raise ValueError(f"Unknown checkbox on login page: {checkbox_name}")
    login_page.check_remember_me()


@when(parsers.parse('I click the "{link_text}" link'))
def i_click_the_link(login_page: LoginPage, link_text: str):
    if link_text.lower() != "forgot password":
        raise ValueError(f"Unknown link on login page: {link_text}")
    login_page.click_forgot_password_link()


@when(parsers.parse('I click the "{button_text}" button'))
def i_click_the_button(forgot_password_page: ForgotPasswordPage, button_text: str):
    if button_text.lower() != "reset password":
        raise ValueError(f"Unknown button: {button_text}")
    forgot_password_page.click_reset_password_button()


@when("I logout and return to the login page")
def i_logout_and_return_to_the_login_page(login_page: LoginPage):
    login_page.navigate_to("/logout")
    login_page.open()
    logger.info("Logged out and returned to login page")


@then("I should be redirected to the dashboard")
def i_should_be_redirected_to_the_dashboard(login_page: LoginPage):
    login_page.wait_for_url_to_contain("dashboard")


@then("I should see the welcome message")
def i_should_see_the_welcome_message(login_page: LoginPage):
    assert login_page.is_welcome_message_displayed(), "Welcome message should be visible"
    logger.info(f"Welcome message: {login_page.get_welcome_message()}")


@then("I should see an error message")
def i_should_see_an_error_message(login_page: LoginPage):
    assert login_page.is_error_message_displayed(), "Error message should be visible"


@then("I should remain on the login page")
def i_should_remain_on_the_login_page(login_page: LoginPage):
    assert login_page.is_login_page(), f"Expected login page, got {login_page.session.current_url}"
    login_page.assert_login_page_loaded()


@then("I should see validation error messages")
def i_should_see_validation_error_messages(login_page: LoginPage):
    assert login_page.is_validation_error_displayed(), "Validation errors should be visible"


@then("I should see an email format error message")
def i_should_see_an_email_format_error_message(login_page: LoginPage):
    assert login_page.is_email_format_error_displayed(), "Email format error should be visible"


@then(parsers.parse('the email field should be pre-filled with "{email}"'))
def the_email_field_should_be_pre_filled_with(login_page: LoginPage, email: str):
    actual = login_page.get_email_field_value()
    assert actual == email, f"Expected email field to contain '{email}', got '{actual}'"


@then("I should be redirected to the forgot password page")
def i_should_be_redirected_to_the_forgot_password_page(forgot_password_page: ForgotPasswordPage):
    forgot_password_page.wait_for_url_to_contain("forgot")


@then("I should see a password reset confirmation message")
def i_should_see_a_password_reset_confirmation_message(forgot_password_page: ForgotPasswordPage):
    assert forgot_password_page.is_confirmation_displayed(), "Reset confirmation should be visible"
