"""
Core module - Contains configuration, logging, errors and the crypto core.
"""

from crypter.core.config import CrypterConfig
from crypter.core.logging import configure_logging, get_secure_logger, SecureLogFilter

__all__ = ["CrypterConfig", "configure_logging", "get_secure_logger", "SecureLogFilter"]
