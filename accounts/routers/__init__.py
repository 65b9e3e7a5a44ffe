"""
FastAPI routers grouped by domain (auth, admin).

Each file inside this package exposes an APIRouter that is included by the
application factory (app.py). Routers resolve their services from
``request.app.state`` so tests can build an app around their own collaborators.
"""
