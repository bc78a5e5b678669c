"""
Pyramid Books HTTP API
======================
Framework-agnostic contracts, error mapping and handlers.

Import handlers from core.http_api.handlers directly; this package
module stays import-light so identity providers can depend on
core.http_api.auth without loading the engines.
"""
