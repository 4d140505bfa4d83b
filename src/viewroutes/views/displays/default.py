"""Master display every view carries; holds shared options, never routed."""

from __future__ import annotations

from typing import Any

from viewroutes.views.displays._base_display import DisplayPlugin
from viewroutes.views.executable import ViewExecutable


class DefaultDisplay(DisplayPlugin):
    display_code = "default"
    display_description = "Master display holding options shared by the other displays"

    def configure(self, title: str = "", enabled: bool = True, **extra: Any) -> None:
        pass  # Storage is handled by the wrapper


ViewExecutable.register_display(DefaultDisplay)
