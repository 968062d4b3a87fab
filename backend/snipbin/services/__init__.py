# Services package init
"""
SnipBin Backend: Services Layer
=================================

Service Inventory:
    - IdentifierService:  time-salted snippet keys
    - SnippetStore (abstract): persistence contract
        - SqlSnippetStore:    async SQLAlchemy
        - MemorySnippetStore: process-local dict
    - dispatch:           raw-vs-viewer classification for GET /paste
    - SnippetService:     upload and retrieval orchestration
    - viewer:             viewer page response
"""
