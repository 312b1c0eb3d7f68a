"""
================================================================================
Locators
================================================================================

Immutable (strategy, value) pairs that identify elements in the current
document. Page objects declare them as class-level constants; the interaction
layer converts them to Playwright selectors every time an element is needed,
so element handles are never reused across operations.

Author: Automation Team
License: MIT
================================================================================
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class By(str, Enum):
    """Supported locator strategies."""

    ID = "id"
    NAME = "name"
    CLASS_NAME = "class name"
    TAG_NAME = "tag name"
    CSS = "css selector"
    XPATH = "xpath"
    LINK_TEXT = "link text"
    PARTIAL_LINK_TEXT = "partial link text"
    TEXT = "text"
    TEST_ID = "test id"


def _css_string(value: str) -> str:
    """Quote a value for use inside a CSS attribute selector."""
    escaped = value.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def _xpath_string(value: str) -> str:
    """Quote a value as an XPath string literal, handling mixed quotes."""
    if '"' not in value:
        return f'"{value}"'
    if "'" not in value:
        return f"'{value}'"
    parts = value.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"


@dataclass(frozen=True)
class Locator:
    """
    A strategy + value pair.

    Usage:
        >>> EMAIL_FIELD = Locator.id("email")
        >>> EMAIL_FIELD.selector
        'css=[id="email"]'
    """

    strategy: By
    value: str

    @property
    def selector(self) -> str:
        """Playwright selector string for this locator."""
        if self.strategy is By.ID:
            return f"css=[id={_css_string(self.value)}]"
        if self.strategy is By.NAME:
            return f"css=[name={_css_string(self.value)}]"
        if self.strategy is By.CLASS_NAME:
            return f"css=[class~={_css_string(self.value)}]"
        if self.strategy is By.TAG_NAME:
            return f"css={self.value}"
        if self.strategy is By.CSS:
            return f"css={self.value}"
        if self.strategy is By.XPATH:
            return f"xpath={self.value}"
        if self.strategy is By.LINK_TEXT:
            return f"xpath=//a[normalize-space(.)={_xpath_string(self.value)}]"
        if self.strategy is By.PARTIAL_LINK_TEXT:
            return f"xpath=//a[contains(normalize-space(.), {_xpath_string(self.value)})]"
        if self.strategy is By.TEXT:
            return f"text={_css_string(self.value)}"
        if self.strategy is By.TEST_ID:
            return f"css=[data-testid={_css_string(self.value)}]"
        raise ValueError(f"Unknown locator strategy: {self.strategy}")

    def __str__(self) -> str:
        return f"By.{self.strategy.name.lower()}: {self.value}"

    # Constructors mirroring the strategy names

    @classmethod
    def id(cls, value: str) -> "Locator":
        return cls(By.ID, value)

    @classmethod
    def name(cls, value: str) -> "Locator":
        return cls(By.NAME, value)

    @classmethod
    def class_name(cls, value: str) -> "Locator":
        return cls(By.CLASS_NAME, value)

    @classmethod
    def tag_name(cls, value: str) -> "Locator":
        return cls(By.TAG_NAME, value)

    @classmethod
    def css(cls, value: str) -> "Locator":
        return cls(By.CSS, value)

    @classmethod
    def xpath(cls, value: str) -> "Locator":
        return cls(By.XPATH, value)

    @classmethod
    def link_text(cls, value: str) -> "Locator":
        return cls(By.LINK_TEXT, value)

    @classmethod
    def partial_link_text(cls, value: str) -> "Locator":
        return cls(By.PARTIAL_LINK_TEXT, value)

    @classmethod
    def text(cls, value: str) -> "Locator":
        return cls(By.TEXT, value)

    @classmethod
    def test_id(cls, value: str) -> "Locator":
        return cls(By.TEST_ID, value)


__all__ = [
    "By",
    "Locator",
]
