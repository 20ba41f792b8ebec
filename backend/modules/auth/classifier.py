"""
Browser classification for the login policy.

``classify_browser`` reduces the parsed browser name, the raw user-agent and
the optional client-asserted browser to one BrowserClass. Precedence, first
match wins:

    ==========  =========================================================
    BRAVE       client asserts Brave, or name/user-agent contains "brave"
    MICROSOFT   name is Edge / IE / Internet Explorer, or user-agent has
                "edg/" or "edge/"
    CHROME      name in the Chromium allow-list and not excluded, or
                user-agent says Chrome with no other vendor marker
    OTHER       anything else
    ==========  =========================================================

Exclusion always beats inclusion inside the CHROME rule.
"""

import re
from enum import Enum
from typing import Optional


class BrowserClass(str, Enum):
    BRAVE = "brave"
    MICROSOFT = "microsoft"
    CHROME = "chrome"
    OTHER = "other"


CHROME_NAMES = (
    "chrome",
    "chromium",
    "chrome webview",
    "chrome headless",
    "chrome mobile",
    "chrome mobile webview",
)
CHROME_EXCLUDED_NAMES = (
    "brave",
    "edge",
    "opera",
    "vivaldi",
    "samsung browser",
    "firefox",
    "safari",
)
CHROME_UA_EXCLUDED = (
    "edg/",
    "edge",
    "opr/",
    "opera",
    "brave",
    "samsungbrowser",
    "firefox",
)

_IE_NAME = re.compile(r"\bie\b")


def is_brave(name: str, user_agent: str, client_browser: Optional[str] = None) -> bool:
    if (client_browser or "").lower() == "brave":
        return True
    return "brave" in (name or "").lower() or "brave" in (user_agent or "").lower()


def is_microsoft(name: str, user_agent: str) -> bool:
    name = (name or "").lower()
    ua = (user_agent or "").lower()
    by_name = "edge" in name or "internet explorer" in name or bool(_IE_NAME.search(name))
    return by_name or "edg/" in ua or "edge/" in ua


def is_chrome_name(name: str) -> bool:
    """Allow-listed Chromium name that no exclusion matches."""
    name = (name or "").lower()
    included = any(chrome in name for chrome in CHROME_NAMES)
    excluded = any(other in name for other in CHROME_EXCLUDED_NAMES)
    return included and not excluded


def is_chrome_user_agent(user_agent: str) -> bool:
    """
    Raw user-agent check. Safari user-agents can mention Chrome for
    compatibility; those without a ``chrome/`` token are not Chrome.
    """
    ua = (user_agent or "").lower()
    if "chrome" not in ua:
        return False
    if any(marker in ua for marker in CHROME_UA_EXCLUDED):
        return False
    if "safari" in ua and "chrome/" not in ua:
        return False
    return True


def is_chrome(name: str, user_agent: str) -> bool:
    return is_chrome_name(name) or is_chrome_user_agent(user_agent)


def classify_browser(
    name: str,
    user_agent: str,
    client_browser: Optional[str] = None,
) -> BrowserClass:
    """Classify a browser using the precedence table in the module docstring."""
    if is_brave(name, user_agent, client_browser):
        return BrowserClass.BRAVE
    if is_microsoft(name, user_agent):
        return BrowserClass.MICROSOFT
    if is_chrome(name, user_agent):
        return BrowserClass.CHROME
    return BrowserClass.OTHER
