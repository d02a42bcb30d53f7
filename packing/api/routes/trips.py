from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from packing.api.dependencies import get_store, get_trip_repository
from packing.infra.Trip_Repository import TripRepository
from packing.infra.Vocabulary_Repository import section_orders
from packing.infra.pdf_utils import generate_pdf_for_trip
from packing.logic.reporting.progress import trip_statistics
from packing.logic.sections.section_builder import (
    Filters, Grouping, NO_GROUP, build_sections, sections_to_dict
)
from packing.utilities.export_import import DataExporter
from packing.utilities.validators import ItemInput, ItemUpdateInput, TripInput, TripRenameInput

router = APIRouter(prefix="/api")


def _trip_summary(trip):
    return {
        "id": trip.id,
        "name": trip.name,
        "created_at": trip.created_at.isoformat(),
        **trip_statistics(trip).to_dict(),
    }


def _trip_sections(trip, store, mode: str, group: Optional[str], location: Optional[str], ungrouped: bool):
    try:
        grouping = Grouping.from_mode(mode)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    filters = Filters(group=NO_GROUP if ungrouped else group, location=location)
    return build_sections(trip.items, grouping, filters, orders=section_orders(store))


# -------------------- Trips --------------------
@router.get("/trips")
def list_trips(repo: TripRepository = Depends(get_trip_repository)):
    return [_trip_summary(t) for t in repo.list_trips()]


@router.post("/trips", status_code=201)
def create_trip(payload: TripInput, repo: TripRepository = Depends(get_trip_repository)):
    trip = repo.create_trip(payload.name, clone_from=payload.clone_from or None)
    return _trip_summary(trip)


@router.get("/trips/{trip_id}")
def get_trip(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    trip = repo.get_trip(trip_id)
    data = _trip_summary(trip)
    data["items"] = [item.to_dict() for item in trip.items]
    return data


@router.put("/trips/{trip_id}")
def rename_trip(trip_id: str, payload: TripRenameInput, repo: TripRepository = Depends(get_trip_repository)):
    return _trip_summary(repo.rename_trip(trip_id, payload.name))


@router.delete("/trips/{trip_id}", status_code=204)
def delete_trip(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    repo.delete_trip(trip_id)
    return Response(status_code=204)


@router.post("/trips/{trip_id}/duplicate", status_code=201)
def duplicate_trip(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    return _trip_summary(repo.duplicate_trip(trip_id))


@router.post("/trips/{trip_id}/reset")
def reset_trip(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    """Unpack every item of the trip."""
    return _trip_summary(repo.set_all_packed(trip_id, False))


# -------------------- Views --------------------
@router.get("/trips/{trip_id}/sections")
def trip_sections(trip_id: str,
                  mode: str = Query(default="location"),
                  group: Optional[str] = Query(default=None),
                  location: Optional[str] = Query(default=None),
                  ungrouped: bool = Query(default=False),
                  repo: TripRepository = Depends(get_trip_repository),
                  store=Depends(get_store)):
    trip = repo.get_trip(trip_id)
    sections = _trip_sections(trip, store, mode, group, location, ungrouped)
    return {"trip_id": trip.id, "mode": mode, "sections": sections_to_dict(sections)}


@router.get("/trips/{trip_id}/statistics")
def trip_stats(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    return trip_statistics(repo.get_trip(trip_id)).to_dict()


@router.get("/trips/{trip_id}/pdf")
def trip_pdf(trip_id: str, mode: str = Query(default="location"),
             repo: TripRepository = Depends(get_trip_repository), store=Depends(get_store)):
    trip = repo.get_trip(trip_id)
    sections = _trip_sections(trip, store, mode, None, None, False)
    pdf = generate_pdf_for_trip(trip, sections)
    return Response(content=pdf, media_type="application/pdf",
                    headers={"Content-Disposition": f'attachment; filename="packing_{trip.id}.pdf"'})


@router.get("/trips/{trip_id}/export.csv")
def trip_csv(trip_id: str, repo: TripRepository = Depends(get_trip_repository)):
    trip = repo.get_trip(trip_id)
    return Response(content=DataExporter.trip_to_csv(trip), media_type="text/csv",
                    headers={"Content-Disposition": f'attachment; filename="packing_{trip.id}.csv"'})


# -------------------- Items --------------------
@router.post("/trips/{trip_id}/items", status_code=201)
def add_item(trip_id: str, payload: ItemInput, repo: TripRepository = Depends(get_trip_repository)):
    item = repo.add_item(trip_id, payload.name, payload.category, payload.location,
                         group=payload.group, container=payload.container,
                         is_optional=payload.is_optional)
    return item.to_dict()


@router.put("/items/{item_id}")
def update_item(item_id: str, payload: ItemUpdateInput, repo: TripRepository = Depends(get_trip_repository)):
    fields = payload.model_dump(exclude_none=True)
    return repo.update_item(item_id, **fields).to_dict()


@router.delete("/items/{item_id}", status_code=204)
def delete_item(item_id: str, repo: TripRepository = Depends(get_trip_repository)):
    repo.delete_item(item_id)
    return Response(status_code=204)


@router.post("/items/{item_id}/toggle")
def toggle_item(item_id: str, repo: TripRepository = Depends(get_trip_repository)):
    return repo.toggle_packed(item_id).to_dict()


@router.post("/items/{item_id}/duplicate", status_code=201)
def duplicate_item(item_id: str, repo: TripRepository = Depends(get_trip_repository)):
    return repo.duplicate_item(item_id).to_dict()
