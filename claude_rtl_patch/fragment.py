"""Build, detect and remove the injected RTL stylesheet fragment."""

from __future__ import annotations

from typing import Dict, List, Mapping

PATCH_START = "/* CLAUDE-CODE-RTL-FIX:START */"
PATCH_END = "/* CLAUDE-CODE-RTL-FIX:END */"

# Stable across releases: set on assistant replies by the webview markup.
ASSISTANT_SELECTOR = '[data-testid="assistant-message"]'

# Input classes are matched loosely; they change less often than message classes.
INPUT_SELECTOR = '[class*="inputContainer_"]'

_AUTO_DIRECTION = [
    "  unicode-bidi: plaintext;",
    "  text-align: start;",
]

_FORCE_LTR = [
    "  unicode-bidi: normal;",
    "  direction: ltr;",
    "  text-align: left;",
]


def class_selector(class_map: Mapping[str, str], name: str) -> str:
    """Exact selector when the hash is known, substring attribute match otherwise."""
    suffix = class_map.get(name)
    if suffix:
        return f".{name}_{suffix}"
    return f'[class*="{name}_"]'


def _rule(selectors: List[str], declarations: List[str]) -> List[str]:
    lines = [f"{s}," for s in selectors[:-1]]
    lines.append(f"{selectors[-1]} {{")
    lines.extend(declarations)
    lines.append("}")
    lines.append("")
    return lines


def synthesize(class_map: Mapping[str, str]) -> str:
    """
    Generate the marker-delimited override block for the given class map.

    ``unicode-bidi: plaintext`` makes every block pick its direction from its
    first strong character, so Hebrew or Arabic paragraphs flow right-to-left
    while English ones stay left-to-right, even inside one message.
    """
    sel: Dict[str, str] = {
        name: class_selector(class_map, name)
        for name in (
            "message",
            "userMessage",
            "userMessageContainer",
            "timelineMessage",
            "slashCommandMessage",
            "slashCommandResultMessage",
            "interruptedMessage",
            "progressContent",
        )
    }
    msg = sel["message"]
    timeline = sel["timelineMessage"]
    scopes = [msg, ASSISTANT_SELECTOR]

    lines = [
        PATCH_START,
        "",
        "/*",
        " * RTL (right-to-left) text support for Claude Code.",
        " * Hebrew, Arabic, Persian, Urdu and other RTL scripts get their",
        " * direction detected per paragraph, so mixed content renders correctly.",
        " */",
        "",
        "/* Auto-detect text direction on all message text content */",
    ]
    lines += _rule(list(sel.values()) + [ASSISTANT_SELECTOR], _AUTO_DIRECTION)

    lines.append("/* The host pins user messages to text-align: left */")
    lines += _rule([f"{msg}{sel['userMessageContainer']}"], ["  text-align: start;"])

    lines.append("/* Paragraphs and inline text */")
    lines += _rule(
        [f"{scope} {tag}" for scope in scopes for tag in ("p", "li", "span", "div")],
        _AUTO_DIRECTION,
    )

    lines.append("/* Code is always LTR */")
    lines += _rule(
        [f"{scope} {tag}" for scope in scopes for tag in ("pre", "code")],
        _FORCE_LTR,
    )

    lines.append("/* Timeline dot: logical offsets follow the block direction */")
    lines += _rule([timeline], ["  padding-inline-start: 30px;", "  padding-left: unset;"])
    lines += _rule([f"{timeline}::before"], ["  inset-inline-start: 9px;", "  left: unset;"])
    lines += _rule([f"{timeline}::after"], ["  inset-inline-start: 12px;", "  left: unset;"])

    lines.append("/* Input area */")
    lines += _rule(
        [f"{INPUT_SELECTOR} textarea", f"{INPUT_SELECTOR} [contenteditable]"],
        _AUTO_DIRECTION,
    )

    lines.append(PATCH_END)
    return "\n".join(lines)


def has_fragment(content: str) -> bool:
    return PATCH_START in content


def excise(content: str) -> str:
    """
    Remove the fragment (markers included) from ``content``.

    Newlines directly before the start marker are dropped with it. Content
    without a start marker followed by an end marker is returned unchanged.
    """
    start = content.find(PATCH_START)
    if start == -1:
        return content
    end = content.find(PATCH_END, start)
    if end == -1:
        return content
    before = content[:start].rstrip("\n")
    after = content[end + len(PATCH_END):]
    return before + after


def append_fragment(content: str, fragment: str) -> str:
    """
    Append ``fragment`` after a blank line.

    Trailing newlines of ``content`` are moved behind the end marker, which
    keeps the file newline-terminated and makes ``excise`` an exact inverse.
    """
    body = content.rstrip("\n")
    tail = content[len(body):]
    return body + "\n\n" + fragment + tail
