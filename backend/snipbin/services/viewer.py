"""
SnipBin Backend: Viewer Page
==============================

What:  Builds the response for interactive callers of GET /paste/{key}.
How:   Serves the external template at VIEWER_TEMPLATE when it exists (the
       page loads the snippet itself from /raw/{key}); otherwise renders a
       minimal page with the HTML-escaped snippet inline.
"""

import html
import logging
from pathlib import Path
from typing import Optional

from fastapi.responses import FileResponse, HTMLResponse, Response

from snipbin.config import settings
from snipbin.schemas.snippet import SnippetRecord

logger = logging.getLogger(__name__)

_FALLBACK_PAGE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<title>Snippet {key}</title>
</head>
<body>
<p>{views} views &middot; <a href="/raw/{key}">raw</a></p>
<pre><code>{content}</code></pre>
</body>
</html>
"""


def render_fallback(snippet: SnippetRecord) -> str:
    return _FALLBACK_PAGE.format(
        key=html.escape(snippet.key),
        views=snippet.view_count,
        content=html.escape(snippet.content),
    )


def viewer_response(snippet: SnippetRecord, template: Optional[str] = None) -> Response:
    path = Path(template or settings.viewer_template)
    if path.is_file():
        return FileResponse(path=str(path), media_type="text/html")

    logger.debug("Viewer template %s not found; rendering built-in page", path)
    return HTMLResponse(render_fallback(snippet))
