"""
FastAPI routers grouped by collection (exercises, journal, journeys).

Each module exposes an APIRouter included by ``wingman.app``. Handlers only
call ``Storage`` and the services built on it; the Storage instance lives on
``app.state.storage``.
"""
