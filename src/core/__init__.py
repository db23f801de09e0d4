"""Core domain package for schoolbot.

Core contains code block extraction, syntax highlighting and chat history
logic without any terminal, HTTP or Textual-specific code, keeping the
rendering engine portable.
"""
