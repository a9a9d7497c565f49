"""HTTP API (Flask) around the ROI calculator.

- orchestrator.py: validate a request body, compute, build exports
- server.py: routes, API-key auth and rate limiting
"""
