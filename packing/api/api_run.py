from fastapi import FastAPI, Request, Query, Body, Depends, HTTPException
from fastapi.responses import JSONResponse

from typing import Optional
import logging

from packing.api.dependencies import get_store
from packing.api.routes import trips, vocabulary
from packing.domain.errors import NotFoundError, PersistenceError, ValidationError
from packing.events.web_observers import start as start_event_observers, get_events as get_web_events
from packing.logic.seeding.seeder import seed_if_needed
from packing.utilities.backup import BackupManager
from packing.utilities.export_import import DataExporter, DataImporter
from packing.utilities.statistics import PackingStats

# Logging
logger = logging.getLogger("packing_app")

# Initialize FastAPI app
app = FastAPI(title="Packing Planner API")

# Include routers
app.include_router(trips.router)
app.include_router(vocabulary.router)


# -------------------- Error mapping --------------------
@app.exception_handler(ValidationError)
async def _validation_error(request: Request, exc: ValidationError):
    return JSONResponse(status_code=400, content={"detail": str(exc)})


@app.exception_handler(NotFoundError)
async def _not_found(request: Request, exc: NotFoundError):
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(PersistenceError)
async def _persistence_error(request: Request, exc: PersistenceError):
    logger.error("Persistence failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=503, content={"detail": str(exc)})


def _resolve_store():
    """The store the routes see, honouring dependency overrides."""
    return app.dependency_overrides.get(get_store, get_store)()


@app.on_event("startup")
def _startup():
    """Register event observers and seed the default vocabulary on first run."""
    start_event_observers()
    if seed_if_needed(_resolve_store()):
        logger.info("Default categories and locations created")


# -------------------- Events / stats --------------------
@app.get('/api/events')
def api_events(since: Optional[int] = Query(default=None)):
    return get_web_events(since)


@app.get('/api/stats')
def api_stats(store=Depends(get_store)):
    return PackingStats(store).overview()


# -------------------- Export / import --------------------
@app.get('/api/export')
def api_export(store=Depends(get_store)):
    return DataExporter(store).export_all()


@app.post('/api/import')
def api_import(payload: dict = Body(...), store=Depends(get_store)):
    summary = DataImporter(store).import_document(payload)
    logger.info("Import finished: %s", summary)
    return summary


# -------------------- Backups --------------------
def _backup_manager(store) -> BackupManager:
    if getattr(store, 'path', None) is None:
        raise HTTPException(status_code=400, detail="In-memory store has no backups")
    return BackupManager(store.path)


@app.get('/api/backups')
def api_list_backups(store=Depends(get_store)):
    return _backup_manager(store).list_backups()


@app.post('/api/backups', status_code=201)
def api_create_backup(store=Depends(get_store)):
    name = _backup_manager(store).create_backup()
    if name is None:
        raise HTTPException(status_code=404, detail="Nothing to back up yet")
    return {"name": name}


@app.post('/api/backups/{name}/restore')
def api_restore_backup(name: str, store=Depends(get_store)):
    _backup_manager(store).restore_backup(name)
    store.reload()
    return {"restored": name}
