"""
DevStash CLI: save snippets from the terminal to a webhook.

Text is read from a file, an editor session or piped stdin, wrapped in a
small JSON envelope and POSTed to the configured webhook.
"""

__version__ = "0.1.0"
