"""
Configuration Module

Type-safe configuration for the recommendation core.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Stage identifiers, session states and provider wire constants

Usage:
------
```python
from weathermate.core.config import get_settings
from weathermate.core.config.constants import SessionState, Stage

settings = get_settings()
lyzr_key = settings.lyzr.LYZR_API_KEY
```
"""

from .constants import ProviderName, SessionState, Stage
from .settings import Settings, get_settings, reload_settings

__all__ = [
    "ProviderName",
    "SessionState",
    "Settings",
    "Stage",
    "get_settings",
    "reload_settings",
]
