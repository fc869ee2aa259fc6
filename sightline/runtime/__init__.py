"""Runtime package.

Keep this module dependency-light: importing `sightline.runtime.*` from unit
tests should not open sockets or read capture files.
"""

__all__: list[str] = []
