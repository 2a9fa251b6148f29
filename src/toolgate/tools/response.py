"""Response builder and the immutable response it produces.

Every handler receives a fresh :class:`ResponseBuilder`.  Handlers append
text lines and set rendering flags; the dispatcher finalizes the builder
exactly once into a :class:`Response`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from toolgate.core.errors import ResponseFinalizedError

if TYPE_CHECKING:
    from toolgate.core.errors import DispatchError

# Flags the rendering stage understands.
FLAGS = ("list_extensions", "include_pages")


@dataclass(frozen=True, slots=True)
class Response:
    """Finalized result of one tool invocation."""

    lines: tuple[str, ...] = ()
    list_extensions: bool = False
    include_pages: bool = False
    error: DispatchError | None = None

    @property
    def is_error(self) -> bool:
        return self.error is not None

    @property
    def text(self) -> str:
        """Lines joined in the order they were appended."""
        return "\n".join(self.lines)


class ResponseBuilder:
    """Per-invocation accumulator for handler output.

    Flags may be set any number of times; the last write wins.  After
    :meth:`finalize` every method raises :class:`ResponseFinalizedError`.
    """

    def __init__(self) -> None:
        self._lines: list[str] = []
        self._flags: dict[str, bool] = dict.fromkeys(FLAGS, False)
        self._finalized = False

    def _check_open(self) -> None:
        if self._finalized:
            msg = "Response builder already finalized"
            raise ResponseFinalizedError(msg)

    def append_response_line(self, text: str) -> None:
        """Append one line of output."""
        self._check_open()
        if not isinstance(text, str):
            msg = f"Response lines must be str, got {type(text).__name__}"
            raise TypeError(msg)
        self._lines.append(text)

    def set_flag(self, name: str, value: bool) -> None:
        """Set a rendering flag by name.

        Raises:
            ValueError: If *name* is not a known flag.
        """
        self._check_open()
        if name not in self._flags:
            msg = f"Unknown response flag: {name}"
            raise ValueError(msg)
        self._flags[name] = bool(value)

    def set_list_extensions(self, value: bool = True) -> None:
        """Ask the renderer to append the installed extension list."""
        self.set_flag("list_extensions", value)

    def set_include_pages(self, value: bool) -> None:
        """Ask the renderer to append the currently open pages."""
        self.set_flag("include_pages", value)

    @property
    def finalized(self) -> bool:
        return self._finalized

    def finalize(self, error: DispatchError | None = None) -> Response:
        """Drain the builder into an immutable :class:`Response`.

        Called by the dispatcher, never by handlers.
        """
        self._check_open()
        self._finalized = True
        return Response(
            lines=tuple(self._lines),
            list_extensions=self._flags["list_extensions"],
            include_pages=self._flags["include_pages"],
            error=error,
        )
