"""
In-memory stand-ins for the Playwright sync objects the framework touches.

Time is simulated: every wait the framework performs through the page
(`wait_for_timeout`) advances a shared FakeClock instead of sleeping.
"""

from typing import Any, Callable, Dict, List, Optional

from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from testsuites.ui_testing.framework.browser_manager import BrowserSession
from testsuites.ui_testing.framework.locator import Locator
from testsuites.ui_testing.framework.waits import WaitPolicy


class FakeClock:
    def __init__(self, now: float = 0.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class FakeElement:
    def __init__(
        self,
        text: str = "",
        value: str = "",
        present: bool = True,
        visible: bool = True,
        enabled: bool = True,
        checked: bool = False,
        attributes: Optional[Dict[str, str]] = None,
        enabled_after_checks: int = 0,
        clock: Optional[FakeClock] = None,
    ):
        self.text = text
        self.value = value
        self.present = present
        self.visible = visible
        self.enabled = enabled
        self.checked = checked
        self.attributes = attributes or {}
        self.enabled_after_checks = enabled_after_checks
        self.enabled_checks = 0
        self.clock = clock
        self.selected: Dict[str, Any] = {}
        self.calls: List[tuple] = []

    def _state_holds(self, state: str) -> bool:
        shown = self.present and self.visible
        return {"attached": self.present, "visible": shown, "hidden": not shown}[state]

    def wait_for(self, state: str = "visible", timeout: Optional[float] = None) -> None:
        self.calls.append(("wait_for", state, timeout))
        if not self._state_holds(state):
            # Playwright only gives up once the whole bound has elapsed
            if self.clock is not None and timeout:
                self.clock.advance(timeout / 1000)
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")

    def is_visible(self) -> bool:
        return self.present and self.visible

    def is_enabled(self, timeout: Optional[float] = None) -> bool:
        self.enabled_checks += 1
        if self.enabled_after_checks and self.enabled_checks >= self.enabled_after_checks:
            self.enabled = True
        return self.enabled

    def is_checked(self) -> bool:
        return self.checked

    def click(self, **kwargs) -> None:
        self.calls.append(("click", kwargs))
        if self.attributes.get("type") == "checkbox":
            self.checked = not self.checked

    def dblclick(self) -> None:
        self.calls.append(("dblclick",))

    def hover(self) -> None:
        self.calls.append(("hover",))

    def drag_to(self, target: "FakeElement") -> None:
        self.calls.append(("drag_to", target))

    def evaluate(self, script: str) -> None:
        self.calls.append(("evaluate", script))

    def fill(self, text: str) -> None:
        self.value = text

    def clear(self) -> None:
        self.value = ""

    def press(self, key: str) -> None:
        self.calls.append(("press", key))

    def press_sequentially(self, text: str) -> None:
        self.value += text

    def inner_text(self, timeout: Optional[float] = None) -> str:
        return self.text

    def input_value(self) -> str:
        return self.value

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def select_option(self, **option: Any) -> None:
        self.selected = option


class FakeQuery:
    def __init__(self, elements: List[FakeElement], clock: Optional[FakeClock] = None):
        self._elements = elements
        self._clock = clock

    @property
    def first(self) -> FakeElement:
        return self._elements[0] if self._elements else FakeElement(present=False, clock=self._clock)

    def all(self) -> List[FakeElement]:
        return [element for element in self._elements if element.present]


class FakeHandle:
    def __init__(self, value: Any):
        self.value = value

    def json_value(self) -> Any:
        return self.value


class FakeFrame:
    def __init__(self, name: str = "", element_id: str = "", clock: Optional[FakeClock] = None):
        self.name = name
        self.clock = clock
        self.element_id = element_id
        self.child_frames: List["FakeFrame"] = []
        self.elements: Dict[str, List[FakeElement]] = {}
        self.ready = True
        self.script_result: Any = True
        self.evaluated: List[tuple] = []

    def add(self, locator: Locator, *elements: FakeElement) -> FakeElement:
        for element in elements:
            element.clock = element.clock or self.clock
        self.elements.setdefault(locator.selector, []).extend(elements)
        return elements[0]

    def locator(self, selector: str) -> FakeQuery:
        return FakeQuery(self.elements.get(selector, []), self.clock)

    def frame_element(self) -> FakeElement:
        return FakeElement(attributes={"id": self.element_id})

    def evaluate(self, script: str, arg: Any = None) -> Any:
        self.evaluated.append((script, arg))
        return None

    def wait_for_function(self, expression: str, arg: Any = None, timeout: Optional[float] = None) -> FakeHandle:
        self.evaluated.append((expression, timeout))
        if not self.ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms exceeded.")
        return FakeHandle(self.script_result)


class FakeDialog:
    def __init__(self, message: str):
        self.message = message
        self.outcome: Optional[str] = None

    def accept(self) -> None:
        self.outcome = "accepted"

    def dismiss(self) -> None:
        self.outcome = "dismissed"


class FakePage:
    def __init__(self, clock: Optional[FakeClock] = None, title: str = "", url: str = "about:blank"):
        self.clock = clock or FakeClock()
        self.main_frame = FakeFrame(clock=self.clock)
        self.url = url
        self._title = title
        self._closed = False
        self.handlers: Dict[str, List[Callable]] = {}
        self.history: List[tuple] = []
        self.brought_to_front = 0

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def emit(self, event: str, payload: Any) -> None:
        for handler in self.handlers.get(event, []):
            handler(payload)

    def title(self) -> str:
        return self._title

    def is_closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def bring_to_front(self) -> None:
        self.brought_to_front += 1

    def goto(self, url: str) -> None:
        self.history.append(("goto", url))
        self.url = url

    def reload(self) -> None:
        self.history.append(("reload",))

    def go_back(self) -> None:
        self.history.append(("back",))

    def go_forward(self) -> None:
        self.history.append(("forward",))

    def content(self) -> str:
        return f"<html><head><title>{self._title}</title></head><body></body></html>"

    def screenshot(self, full_page: bool = False) -> bytes:
        return b"\x89PNG fake"

    def wait_for_timeout(self, timeout_ms: float) -> None:
        self.clock.advance(timeout_ms / 1000)


class FakeContext:
    def __init__(self, clock: Optional[FakeClock] = None, fail_new_page: bool = False):
        self.clock = clock or FakeClock()
        self.fail_new_page = fail_new_page
        self.pages: List[FakePage] = []
        self.handlers: Dict[str, List[Callable]] = {}
        self.default_timeout: Optional[float] = None
        self.navigation_timeout: Optional[float] = None
        self.closed = 0

    def on(self, event: str, handler: Callable) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def new_page(self) -> FakePage:
        if self.fail_new_page:
            raise RuntimeError("page crashed")
        page = FakePage(self.clock)
        self.pages.append(page)
        for handler in self.handlers.get("page", []):
            handler(page)
        return page

    def set_default_timeout(self, timeout: float) -> None:
        self.default_timeout = timeout

    def set_default_navigation_timeout(self, timeout: float) -> None:
        self.navigation_timeout = timeout

    def close(self) -> None:
        self.closed += 1


class FakeBrowser:
    def __init__(self, context: Optional[FakeContext] = None):
        self.context = context or FakeContext()
        self.context_options: Dict[str, Any] = {}
        self.closed = 0

    def new_context(self, **options: Any) -> FakeContext:
        self.context_options = options
        return self.context

    def close(self) -> None:
        self.closed += 1


class FakeBrowserType:
    def __init__(self, name: str, browser: Optional[FakeBrowser] = None, error: Optional[Exception] = None):
        self.name = name
        self.browser = browser or FakeBrowser()
        self.error = error
        self.launches: List[Dict[str, Any]] = []

    def launch(self, **options: Any) -> FakeBrowser:
        self.launches.append(options)
        if self.error is not None:
            raise self.error
        return self.browser


class FakePlaywright:
    def __init__(self, **browser_types: FakeBrowserType):
        self.chromium = browser_types.get("chromium") or FakeBrowserType("chromium")
        self.firefox = browser_types.get("firefox") or FakeBrowserType("firefox")
        self.webkit = browser_types.get("webkit") or FakeBrowserType("webkit")
        self.stopped = 0

    def stop(self) -> None:
        self.stopped += 1


def make_session(
    timeout: float = 2.0,
    poll_interval: float = 0.5,
    script_timeout: float = 5.0,
    implicit_wait: float = 10.0,
    clock: Optional[FakeClock] = None,
) -> BrowserSession:
    """Live-looking BrowserSession over fakes, with one open page."""
    clock = clock or FakeClock()
    context = FakeContext(clock)
    browser = FakeBrowser(context)
    page = context.new_page()
    return BrowserSession(
        browser_type="chrome",
        playwright=FakePlaywright(),
        browser=browser,
        context=context,
        page=page,
        wait=WaitPolicy(timeout=timeout, poll_interval=poll_interval, clock=clock),
        implicit_wait=implicit_wait,
        page_load_timeout=30,
        script_timeout=script_timeout,
    )
