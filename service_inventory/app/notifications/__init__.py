"""
Transaction alert e-mails.
"""

from .email_client import EmailNotifier

__all__ = ["EmailNotifier"]
