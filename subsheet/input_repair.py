"""
input_repair.py
Best-effort cleanup of near-valid JSON text before it is decoded.

The rules here are tied to malformed payloads seen in practice, not a general
JSON repair. Each rule is a named, standalone function so a new pattern can be
added to REPAIR_RULES without touching the others. Anything they do not fix is
left for the decoder to reject.

Usage:
    from subsheet.input_repair import repair
    fixed = repair(text)
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Callable, List

from bs4 import BeautifulSoup

log = logging.getLogger(__name__)

CHAT_MARKER = "this is my json"

# "<key>"<gap>: "<value>",  -- the gap must be blank for the rule to rewrite it
_KEY_GAP_RE = re.compile(r'"([^"]*)"([^"]*):\s*"([^"]*)",')
# "client_id": "<value>,  -- value cut short by a separator before its closing quote.
# The value stops at the first comma, so a value this rule closed never matches again.
_CLIENT_ID_RE = re.compile(r'"client_id":\s*"([^",]*),')
_JSON_SCRIPT_RE = re.compile(r'application/(ld\+)?json', re.IGNORECASE)


# ---------- Rule type ----------
@dataclass(frozen=True)
class RepairRule:
    name: str
    apply: Callable[[str], str]


# ---------- Individual rules ----------
def _markup_text(text: str) -> str:
    soup = BeautifulSoup(text, "html.parser")
    for script in soup.find_all("script"):
        if _JSON_SCRIPT_RE.search(script.get("type", "")) and script.string:
            return script.string.strip()
    block = soup.find(["pre", "code"])
    if block is not None:
        return block.get_text().strip()
    return soup.get_text().strip()


def unwrap_markup(text: str) -> str:
    """
    Reduce HTML-wrapped input (a pasted <pre> block, a saved page) to its text.
    Only fires when the input starts with '<', so a bare JSON object never changes.
    Preference: <script type="application/json"> (or ld+json), then the first
    <pre>/<code> block, then the text of the whole page.

    Escaped markup inside a block (`<pre>&lt;pre&gt;...`) is peeled again until
    the text no longer starts with '<' or stops getting shorter.
    """
    while text.lstrip().startswith('<'):
        inner = _markup_text(text)
        if len(inner) >= len(text):
            break
        text = inner
    return text


def strip_chat_prefix(text: str, marker: str = CHAT_MARKER) -> str:
    """Drop conversational filler ("this is my json ...") in front of the object."""
    if marker not in text:
        return text
    start = text.find('{')
    if start == -1:
        return text
    return text[start:]


def fix_key_gap(text: str) -> str:
    """Rewrite `"key"<blank>: "value",` to `"key": "value",`; non-blank gaps are left alone."""
    def _sub(m: re.Match) -> str:
        key, gap, value = m.groups()
        if gap.strip() == '':
            return f'"{key}": "{value}",'
        return m.group(0)
    return _KEY_GAP_RE.sub(_sub, text)


def fix_client_id_comma(text: str) -> str:
    """Close a client_id string whose closing quote was lost behind a comma."""
    return _CLIENT_ID_RE.sub(r'"client_id": "\1",', text)


# ---------- Rule chain ----------
REPAIR_RULES: List[RepairRule] = [
    RepairRule("chat_prefix", strip_chat_prefix),
    RepairRule("key_gap", fix_key_gap),
    RepairRule("client_id_comma", fix_client_id_comma),
]

MARKUP_RULE = RepairRule("markup", unwrap_markup)


def repair(text: str, unwrap: bool = True) -> str:
    """
    Run every repair rule in order and return the result.
    Never raises: text no rule applies to comes back unchanged.
    """
    rules = [MARKUP_RULE] + REPAIR_RULES if unwrap else REPAIR_RULES
    for rule in rules:
        fixed = rule.apply(text)
        if fixed != text:
            log.debug("repair rule %s rewrote input (%d -> %d chars)", rule.name, len(text), len(fixed))
        text = fixed
    return text
