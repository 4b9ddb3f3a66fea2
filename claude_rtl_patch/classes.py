"""Discover the build-hashed CSS-module class names in the webview stylesheet."""

from __future__ import annotations

import re
from typing import Dict, Optional

# Semantic class names emitted by the extension's CSS modules, in lookup order.
# The build appends "_<hash>" to each; the hash changes between releases.
KNOWN_CLASSES = (
    "message",
    "messagesContainer",
    "chatContainer",
    "userMessageContainer",
    "userMessage",
    "timelineMessage",
    "emptyStateContent",
    "emptyStateText",
    "highlightedMessage",
    "slashCommandMessage",
    "slashCommandResultMessage",
    "interruptedMessage",
    "metaMessage",
    "progressContent",
)

# Without this class the stylesheet is not one we know how to patch.
PRIMARY_CLASS = "message"

# A class name ends at a selector boundary. Requiring one keeps "message"
# from matching inside "messagesContainer_..." and similar longer names.
_BOUNDARY = r"(?=[\s{.,:\[>~+])"

_CLASS_PATTERNS = {
    name: re.compile(r"\." + re.escape(name) + r"_([A-Za-z0-9]+)" + _BOUNDARY)
    for name in KNOWN_CLASSES
}

_RE_PRIMARY_RULE = re.compile(r"\.message_([A-Za-z0-9]+)\s*\{")
_RE_CONTAINER_RULE = re.compile(r"\.chatContainer_([A-Za-z0-9]+)\s*\{")


def resolve(content: str) -> Dict[str, str]:
    """
    Map each known class name to the hash suffix it carries in ``content``.

    Only the first occurrence of each class is used. Classes that do not
    occur are left out of the result. Each class is resolved on its own, so
    a build that bundles several CSS modules may yield different hashes.
    """
    class_map: Dict[str, str] = {}
    for name in KNOWN_CLASSES:
        m = _CLASS_PATTERNS[name].search(content)
        if m:
            class_map[name] = m.group(1)
    return class_map


def extract_hash_suffix(content: str) -> Optional[str]:
    """Return the build hash of the main message rule (chatContainer as fallback)."""
    m = _RE_PRIMARY_RULE.search(content)
    if m:
        return m.group(1)
    m = _RE_CONTAINER_RULE.search(content)
    if m:
        return m.group(1)
    return None
