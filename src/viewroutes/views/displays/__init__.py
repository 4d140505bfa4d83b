"""Display plugins.

Kept free of side effects: each concrete display registers itself with
``ViewExecutable`` when its module is imported (``viewroutes.__init__``
imports the built-in ones).
"""

from ._base_display import PAGE_CONTROLLER, DisplayPlugin, PathDisplay

__all__ = ["DisplayPlugin", "PAGE_CONTROLLER", "PathDisplay"]
