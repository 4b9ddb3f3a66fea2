"""Shared stylesheet samples."""

# Mimics the webview stylesheet shipped with the extension.
SAMPLE_CSS = (
    ".chatContainer_Abc123{display:flex;overflow:hidden}\n"
    ".messagesContainer_Abc123{overflow-y:auto;display:flex;flex-direction:column}\n"
    ".message_Abc123{color:var(--app-primary-foreground);display:flex;flex-direction:column;"
    "align-items:flex-start;padding:8px 0}\n"
    ".message_Abc123.userMessageContainer_Abc123{text-align:left;position:relative;"
    "align-items:flex-start;margin-left:0}\n"
    ".userMessageContainer_Abc123{display:inline-block;position:relative;margin:4px 0}\n"
    ".userMessage_Abc123{color:var(--app-secondary-foreground);width:100%;font-style:italic}\n"
    ".timelineMessage_Abc123{user-select:text;align-items:flex-start;padding-left:30px}\n"
    '.timelineMessage_Abc123:before{content:"";position:absolute;left:9px}\n'
    ".slashCommandMessage_Abc123{font-weight:bold}\n"
    ".slashCommandResultMessage_Abc123{opacity:0.8}\n"
    ".interruptedMessage_Abc123{border-top:1px dashed}\n"
    ".progressContent_Abc123{display:flex}\n"
    ".highlightedMessage_Abc123{opacity:1}"
)
