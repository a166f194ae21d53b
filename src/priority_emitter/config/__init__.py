"""
Configuration subsystem for the priority emitter.

Static configuration is loaded from environment variables (with `.env`
support via python-dotenv) when this package is imported.

Usage
-----
```python
from priority_emitter.config import Config

ceiling = Config.MAX_LISTENERS
if Config.is_production():
    ...
```
"""

from priority_emitter.config.config import Config, Environment

__all__ = [
    "Config",
    "Environment",
]
