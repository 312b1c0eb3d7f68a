import pytest

from testsuites.ui_testing.steps.common_steps import _absolute
from testsuites.ui_testing.steps.login_steps import i_check_the_checkbox, i_click_the_link


def test_relative_paths_are_joined_to_base_url():
    assert _absolute("/login", "http://app.test/") == "http://app.test/login"
    assert _absolute("https://other.test/x", "http://app.test") == "https://other.test/x"


def test_unknown_names_are_rejected():
    with pytest.raises(ValueError, match="Unknown checkbox"):
        i_check_the_checkbox(login_page=None, checkbox_name="Subscribe")
    with pytest.raises(ValueError, match="Unknown link"):
        i_click_the_link(login_page=None, link_text="Sign up")
