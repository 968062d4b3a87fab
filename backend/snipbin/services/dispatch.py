"""
SnipBin Backend: Retrieval Dispatch Policy
============================================

What:  Decides whether GET /paste/{key} answers with raw text or the viewer.
How:   Two pure functions over a small, enumerated set of signals:

    classify_client(declared, user_agent, script_clients) -> ClientKind
        1. X-Client-Type header, if it names a known kind, wins
        2. Otherwise the User-Agent is split into product tokens
           ("Lua/5.1 curl/8.0 (comment)") and each product name is checked,
           case-insensitively, for a configured script client name as its
           prefix ("lua" covers "LuaSocket" and "lua-resty-http")
        3. Anything else, including a missing User-Agent, is interactive

    choose_mode(raw_requested, client) -> RetrievalMode
        RAW when the raw flag is set or the caller is a script, else VIEWER

Only product names are matched, never comments, so browsers whose
User-Agent merely mentions a script runtime in a comment stay on the viewer.
"""

import enum
import re
from typing import Iterable, List, Optional


class ClientKind(str, enum.Enum):
    SCRIPT = "script"
    INTERACTIVE = "interactive"


class RetrievalMode(str, enum.Enum):
    RAW = "raw"
    VIEWER = "viewer"


# Parenthesized comments carry platform details, not products
_COMMENT_RE = re.compile(r"\([^)]*\)")

_DECLARED_KINDS = {kind.value for kind in ClientKind}


def product_names(user_agent: Optional[str]) -> List[str]:
    """Lower-cased product names of a User-Agent header, comments dropped."""
    if not user_agent:
        return []
    names = []
    for token in _COMMENT_RE.sub(" ", user_agent).split():
        name = token.split("/", 1)[0].strip().lower()
        if name:
            names.append(name)
    return names


def classify_client(
    declared: Optional[str],
    user_agent: Optional[str],
    script_clients: Iterable[str],
) -> ClientKind:
    if declared:
        value = declared.strip().lower()
        # Unknown declarations fall through to the User-Agent
        if value in _DECLARED_KINDS:
            return ClientKind(value)

    scripts = tuple(name.strip().lower() for name in script_clients if name.strip())
    if scripts and any(name.startswith(scripts) for name in product_names(user_agent)):
        return ClientKind.SCRIPT
    return ClientKind.INTERACTIVE


def choose_mode(raw_requested: bool, client: ClientKind) -> RetrievalMode:
    if raw_requested or client is ClientKind.SCRIPT:
        return RetrievalMode.RAW
    return RetrievalMode.VIEWER
