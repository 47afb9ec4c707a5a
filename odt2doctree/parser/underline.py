"""
Underline reconciliation.

In ODF the underline is an inherited property of each text run. In the CSS
model the tree is rendered with, a descendant cannot switch off the
decoration line painted by an ancestor, and a "currentcolor" underline does
not follow the color of nested runs. Two flags, scoped per open element,
compensate:

    set_children_underline        the children must carry their own
                                  underline (ancestor underline follows
                                  the font color)
    ensure_children_no_underline  an ancestor is underlined, so a child
                                  declaring "none" must be isolated to
                                  actually hide it

A scope is opened for every tracked element and closed when the element
ends. Only spans are rewritten on close, using the flags of the enclosing
scope.
"""

from dataclasses import dataclass
from typing import MutableMapping, Optional

LINE = "textDecorationLine"
COLOR = "textDecorationColor"


@dataclass(frozen=True)
class UnderlineScope:
    set_children_underline: bool = False
    ensure_children_no_underline: bool = False


ROOT_SCOPE = UnderlineScope()


def open_scope(
    styles: MutableMapping[str, str], parent: Optional[UnderlineScope]
) -> UnderlineScope:
    """Flags for the children of an element with the given resolved styles."""
    parent = parent or ROOT_SCOPE
    set_children_underline = parent.set_children_underline
    ensure_children_no_underline = parent.ensure_children_no_underline

    line = styles.get(LINE)
    if line == "underline":
        ensure_children_no_underline = True
        color = styles.get(COLOR)
        if color is not None:
            set_children_underline = color == "currentcolor"
    elif line == "none":
        ensure_children_no_underline = False

    return UnderlineScope(set_children_underline, ensure_children_no_underline)


def _isolate(styles: MutableMapping[str, str]) -> None:
    # An inline-block is not decorated by the underline of its ancestors
    styles["display"] = "inline-block"


def close_span(
    styles: MutableMapping[str, str], parent: Optional[UnderlineScope]
) -> None:
    """Rewrite the styles of an ending span against its enclosing scope."""
    parent = parent or ROOT_SCOPE
    line = styles.get(LINE)

    if parent.set_children_underline:
        # Declared or not, anything but "none" becomes a plain underline
        if line != "none":
            styles[LINE] = "underline"
        elif parent.ensure_children_no_underline:
            _isolate(styles)
    elif parent.ensure_children_no_underline and line == "none":
        _isolate(styles)
