"""
================================================================================
Common Step Definitions
================================================================================

Navigation and page-level checks shared by every feature.

================================================================================
"""

from __future__ import annotations

import allure
from loguru import logger
from pytest_bdd import given, parsers, then, when

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.config import TestConfig
from testsuites.ui_testing.framework.page_base import BasePage


_HOME_PAGES = ("home", "main", "start")


def _absolute(url: str, base_url: str) -> str:
    if url.startswith("/"):
        return f"{base_url.rstrip('/')}{url}"
    return url


@given(parsers.parse('I am on the "{page_name}" page'))
def i_am_on_the_page(browser_session: BrowserSession, ui_config: TestConfig, page_name: str):
    with allure.step(f"Open {page_name} page"):
        browser_session.navigate_to(ui_config.base_url)
    logger.info(f"Navigated to {page_name} page: {ui_config.base_url}")


@given(parsers.parse('I navigate to "{url}"'))
@when(parsers.parse('I navigate to "{url}"'))
def i_navigate_to(browser_session: BrowserSession, ui_config: TestConfig, url: str):
    target = _absolute(url, ui_config.base_url)
    browser_session.navigate_to(target)
    logger.info(f"Navigated to URL: {target}")


@when(parsers.parse("I wait for {seconds:d} seconds"))
def i_wait_for_seconds(browser_session: BrowserSession, seconds: int):
    browser_session.pause(seconds)
    logger.info(f"Waited for {seconds} seconds")


@when("I refresh the page")
def i_refresh_the_page(browser_session: BrowserSession):
    browser_session.refresh()
    logger.info("Refreshed the page")


@when("I navigate back")
def i_navigate_back(browser_session: BrowserSession):
    browser_session.back()
    logger.info("Navigated back")


@when("I navigate forward")
def i_navigate_forward(browser_session: BrowserSession):
    browser_session.forward()
    logger.info("Navigated forward")


@then(parsers.parse('I should be on the "{page_name}" page'))
def i_should_be_on_the_page(browser_session: BrowserSession, ui_config: TestConfig, page_name: str):
    current_url = browser_session.current_url
    logger.info(f"Current URL: {current_url}")
    logger.info(f"Current title: {browser_session.title}")

    if page_name.lower() in _HOME_PAGES:
        assert current_url.rstrip("/") == ui_config.base_url.rstrip("/"), (
            f"Expected to be on {ui_config.base_url}, but was on {current_url}"
        )
    else:
        slug = page_name.lower().replace(" ", "-")
        assert slug in current_url.lower(), f"Expected '{slug}' in URL, got {current_url}"


@then(parsers.parse('the page title should contain "{expected_title}"'))
def the_page_title_should_contain(browser_session: BrowserSession, ui_config: TestConfig, expected_title: str):
    BasePage(browser_session, ui_config).wait_for_title_to_contain(expected_title)
    logger.info(f"Page title: {browser_session.title}")


@then(parsers.parse('the URL should contain "{expected_url}"'))
def the_url_should_contain(browser_session: BrowserSession, ui_config: TestConfig, expected_url: str):
    BasePage(browser_session, ui_config).wait_for_url_to_contain(expected_url)
    logger.info(f"Current URL: {browser_session.current_url}")


@then("I should see the page loaded successfully")
def i_should_see_the_page_loaded_successfully(browser_session: BrowserSession, ui_config: TestConfig):
    BasePage(browser_session, ui_config).wait_for_page_load()
    logger.info(
        f"Page loaded successfully - Title: {browser_session.title}, URL: {browser_session.current_url}"
    )
