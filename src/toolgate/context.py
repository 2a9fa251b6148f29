"""Execution context protocol.

The browser-automation backend that tool handlers call into.  It is
owned and lifecycle-managed by the host; toolgate only consumes it.
Implementations are responsible for serializing conflicting operations
(e.g. concurrent installs against one browser) and for their own
timeouts.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True, slots=True)
class InstalledExtension:
    """An extension known to the browser."""

    id: str
    name: str
    version: str
    enabled: bool
    path: str  # unpacked folder it was installed from


@dataclass(frozen=True, slots=True)
class SidepanelResult:
    """Outcome of opening an extension's side panel."""

    url: str
    note: str
    window_id: int


@dataclass(frozen=True, slots=True)
class PageInfo:
    """An open page (tab, popup or worker target)."""

    index: int
    url: str
    selected: bool = False


@runtime_checkable
class ExecutionContext(Protocol):
    """Capabilities a tool handler may call."""

    async def install_extension(self, path: str) -> str:
        """Install an unpacked extension from *path*; return its id.

        Raises:
            Exception: If *path* is not an unpacked extension.
        """
        ...

    async def uninstall_extension(self, extension_id: str) -> None:
        """Uninstall an extension.

        Raises:
            Exception: If the id is unknown.
        """
        ...

    def get_extension(self, extension_id: str) -> InstalledExtension | None:
        """Look up an extension.  Never raises; ``None`` means absent."""
        ...

    async def open_extension_sidepanel(self, extension_id: str) -> SidepanelResult:
        """Open an extension's side panel in a detached window.

        Raises:
            Exception: If the extension has no running worker or no
                ``side_panel.default_path`` in its manifest.
        """
        ...

    def list_extensions(self) -> list[InstalledExtension]:
        """All installed extensions.  Used by the renderer only."""
        ...

    def list_pages(self) -> list[PageInfo]:
        """Currently open pages.  Used by the renderer only."""
        ...
