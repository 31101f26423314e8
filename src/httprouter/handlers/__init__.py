"""
Request handlers shipped with the package.

    pages.py   The walkthrough's demo site (hello, goodbye, text, json)
"""

from .pages import hello, goodbye, plaintext, json_greeting, register_pages

__all__ = ["hello", "goodbye", "plaintext", "json_greeting", "register_pages"]
