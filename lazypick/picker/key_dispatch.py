"""Mode-specific key handling for the selection controller.

Each handler takes the controller and one normalized key token (see
``lazypick.input``) and returns ``(handled, outcome)``. ``outcome`` is
``None`` while the session continues. Unknown keys come back unhandled and
change nothing.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

from ..input import UNKNOWN_KEY
from .types import Mode, Outcome

if TYPE_CHECKING:
    from .controller import SelectionController

KeyResult = tuple[bool, "Outcome | None"]
KeyHandler = Callable[["SelectionController", str], KeyResult]

CONTINUE: KeyResult = (True, None)
IGNORED: KeyResult = (False, None)

ENTER_KEYS = frozenset({"ENTER", "ENTER_CR", "ENTER_LF"})
SPACE_KEYS = frozenset({" ", "SPACE"})
VIM_BOUND_KEYS = frozenset({"j", "k", "g", "G", "q", "/", "?", " "})


def is_printable_key(key: str) -> bool:
    """Return whether ``key`` is a single typed character."""
    return len(key) == 1 and key.isprintable()


def _navigate(controller: SelectionController, key: str, *, vim: bool) -> bool:
    """Apply cursor keys shared by every list-showing mode."""
    if key in {"UP", "CTRL_P"} or (vim and key == "k"):
        controller.move_cursor(-1)
    elif key in {"DOWN", "CTRL_N"} or (vim and key == "j"):
        controller.move_cursor(1)
    elif key == "PAGE_UP":
        controller.page(-1)
    elif key == "PAGE_DOWN":
        controller.page(1)
    elif key == "HOME" or (vim and key == "g"):
        controller.jump_first()
    elif key == "END" or (vim and key == "G"):
        controller.jump_last()
    else:
        return False
    return True


def _global(controller: SelectionController, key: str) -> KeyResult | None:
    """Keys with the same meaning in every mode."""
    if key == "CTRL_C":
        return True, controller.cancel()
    if key == "F1":
        controller.toggle_help()
        return CONTINUE
    if key == "F12":
        controller.toggle_accessibility()
        return CONTINUE
    if key == "CTRL_S":
        controller.speak_current()
        return CONTINUE
    if key == "CTRL_D":
        controller.describe_current()
        return CONTINUE
    return None


def _edit_query(controller: SelectionController, key: str) -> bool:
    if key == "BACKSPACE":
        controller.backspace()
        return True
    if key == "CTRL_U":
        controller.clear_query()
        return True
    return False


def handle_interactive_key(controller: SelectionController, key: str) -> KeyResult:
    """Browse mode: navigation, confirm/cancel, and vim bindings when enabled."""
    config = controller.config
    vim = config.vim_mode
    shared = _global(controller, key)
    if shared is not None:
        return shared
    if _navigate(controller, key, vim=vim):
        return CONTINUE
    if key in ENTER_KEYS:
        return True, controller.confirm()
    if key == "ESC" or (vim and key == "q"):
        return True, controller.cancel()
    if key == "TAB" or (key in SPACE_KEYS and config.multi_select):
        return controller.toggle_selection(), None
    if key == "RIGHT":
        return controller.enter_preview(), None
    if key == "?" and vim:
        controller.toggle_help()
        return CONTINUE
    if key == "/" and vim:
        return controller.enter_search(), None
    if not config.allow_search:
        return IGNORED
    if _edit_query(controller, key):
        return CONTINUE
    if is_printable_key(key) and not (vim and key in VIM_BOUND_KEYS):
        return controller.start_search_with(key), None
    return IGNORED


def handle_search_key(controller: SelectionController, key: str) -> KeyResult:
    """Query editing mode: every printable character is typed."""
    shared = _global(controller, key)
    if shared is not None:
        return shared
    if key == "ESC":
        controller.leave_search(clear=True)
        return CONTINUE
    if key in ENTER_KEYS:
        controller.leave_search(clear=False)
        return CONTINUE
    if _navigate(controller, key, vim=False):
        return CONTINUE
    if key == "TAB":
        return controller.toggle_selection(), None
    if _edit_query(controller, key):
        return CONTINUE
    if is_printable_key(key):
        return controller.type_text(key), None
    return IGNORED


def handle_preview_key(controller: SelectionController, key: str) -> KeyResult:
    """Preview pane: the list stays navigable and the pane follows the cursor."""
    vim = controller.config.vim_mode
    shared = _global(controller, key)
    if shared is not None:
        return shared
    if key in {"LEFT", "ESC"} or (vim and key == "q"):
        controller.leave_preview()
        return CONTINUE
    if _navigate(controller, key, vim=vim):
        return CONTINUE
    if key in ENTER_KEYS:
        return True, controller.confirm()
    if key == "TAB" or (key in SPACE_KEYS and controller.config.multi_select):
        return controller.toggle_selection(), None
    if key == "?" and vim:
        controller.toggle_help()
        return CONTINUE
    return IGNORED


def handle_help_key(controller: SelectionController, key: str) -> KeyResult:
    """Help overlay: any key except the global ones dismisses it."""
    if key == "CTRL_C":
        return True, controller.cancel()
    if key in {"F12", "CTRL_S", "CTRL_D"}:
        return _global(controller, key) or IGNORED
    controller.toggle_help()
    return CONTINUE


MODE_HANDLERS: dict[Mode, KeyHandler] = {
    Mode.INTERACTIVE: handle_interactive_key,
    Mode.SEARCH: handle_search_key,
    Mode.PREVIEW: handle_preview_key,
    Mode.HELP: handle_help_key,
}


def dispatch_key(controller: SelectionController, key: str) -> KeyResult:
    """Route ``key`` to the handler for the controller's current mode."""
    if not key or key == UNKNOWN_KEY:
        return IGNORED
    return MODE_HANDLERS[controller.mode](controller, key)
