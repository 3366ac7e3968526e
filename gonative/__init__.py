"""Public entry points for the gonative method-channel bridge.

This package-level module provides a stable import surface for higher layers
(``cli``, ``app.py``).
"""

from gonative import channel as _channel

# Re-export the channel API without duplicating symbol lists.
for _name in _channel.__all__:
    globals()[_name] = getattr(_channel, _name)

__all__ = list(_channel.__all__)
