"""Protocol constants shared across pyipsas."""

from __future__ import annotations

USER_AGENT = "pyipsas"

#: Backend functions are exposed under this path prefix.
RPC_PATH_PREFIX = "/rpc/"

# Backend function names.
FN_LOGIN = "handleLogin"
FN_LOGOUT = "handleLogout"
FN_SAVE_NOTE_DATA = "saveNoteData"
