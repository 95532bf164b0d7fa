"""Markdown engine adapter, reference scanning, and selector parsing."""
