"""
Package marker for the marketplace ledger service.
It groups the HTTP API layer and the shared settings, logging, and storage helpers under one import path.
Most functionality lives in the sibling packages; this file intentionally stays lightweight.
"""
