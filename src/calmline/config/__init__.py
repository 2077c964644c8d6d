"""
CALMLINE Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of detector thresholds
- Secure handling of secrets
"""

from calmline.config.settings import DetectorSettings, Settings, get_settings

__all__ = ["DetectorSettings", "Settings", "get_settings"]
