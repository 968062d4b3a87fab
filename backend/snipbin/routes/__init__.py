# Routes package init
"""
SnipBin Backend: API Routes Package
=====================================

Route Inventory:
    - upload.py:    POST /upload          (store a snippet, return its link)
    - snippets.py:  GET  /paste/{key}     (viewer or raw, counts a view)
                    GET  /raw/{key}       (raw text, no side effects)
    - health.py:    GET  /health          (liveness probe)

Routes are thin: they pull data out of the request, call SnippetService and
pick the response class. Errors are raised, never formatted, here.
"""
