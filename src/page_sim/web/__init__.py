"""JSON web API for the simulator.

This package provides a Flask application that exposes the engine over
HTTP for browser front ends.  It is an **optional** extra — install
with::

    pip install page-sim[web]

The ``create_app`` factory in ``app.py`` serves:

- ``GET /api/policies`` — the four policies and their descriptions.
- ``GET /api/scenarios`` — preset workloads.
- ``POST /api/simulate`` — run one policy and return the full trace.
- ``POST /api/trace`` — run one policy and return the text export.
- ``POST /api/compare`` — run every policy and return the totals.
"""
