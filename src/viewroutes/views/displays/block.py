"""Block display: rendered inside a region, never bound to a path."""

from __future__ import annotations

from typing import Any, Optional

from viewroutes.views.displays._base_display import DisplayPlugin
from viewroutes.views.executable import ViewExecutable


class BlockDisplay(DisplayPlugin):
    display_code = "block"
    display_description = "Display the view as a block"

    def configure(
        self,
        block_description: Optional[str] = None,
        title: str = "",
        enabled: bool = True,
        **extra: Any,
    ) -> None:
        pass  # Storage is handled by the wrapper

    def block_description(self) -> str:
        return self.get_option("block_description") or f"{self.view_id}: {self.display_id}"


ViewExecutable.register_display(BlockDisplay)
