"""RTL text support patch for the Claude Code editor extension stylesheet."""

__version__ = "1.0.0"
