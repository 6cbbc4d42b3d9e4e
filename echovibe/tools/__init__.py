"""
Tools package for the EchoVibe service.

This package contains utility functions for:
- Placeholder image link generation
- Quote email composition and SMTP delivery
"""

from .links import build_image_url, encode_uri_component
from .mailer import QuoteResult, send_quote, render_quote_html, smtp_configured

__all__ = [
    "build_image_url",
    "encode_uri_component",
    "QuoteResult",
    "send_quote",
    "render_quote_html",
    "smtp_configured",
]
