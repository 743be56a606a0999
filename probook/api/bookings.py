from __future__ import annotations

import logging
import warnings
from collections.abc import Callable
from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from probook.api.schemas import (
    BookingDraftSchema,
    BookingListSchema,
    BookingSchema,
    ConflictSchema,
    SaveResponseSchema,
    ServiceSchema,
    StatsSchema,
    StatusUpdateSchema,
)
from probook.application.exceptions import NotFoundError, PersistenceError, StoreRecoveryWarning, ValidationError
from probook.application.ports.service_catalog import ServiceCatalogPort
from probook.application.use_cases.booking_engine import BookingEngine, BookingResult
from probook.application.use_cases.export_csv import export_csv, export_filename
from probook.application.use_cases.query import BookingQuery, SortOrder, query_bookings, summarize
from probook.domain.entities.booking import Booking, BookingStatus
from probook.wiring.dependencies import get_booking_engine, get_service_catalog


router = APIRouter()
logger = logging.getLogger(__name__)


def _persistence_failure(e: PersistenceError) -> HTTPException:
    logger.exception("Booking store failure", extra={"reason": str(e)})
    return HTTPException(status_code=500, detail="Booking storage is unavailable")


def _load_reporting_recovery(load: Callable[[], list[Booking]]) -> tuple[list[Booking], list[str]]:
    """Run a store read and collect any corrupted-store recovery notices it raised."""
    with warnings.catch_warnings(record=True) as caught:
        warnings.simplefilter("always", StoreRecoveryWarning)
        bookings = load()
    notices = [str(w.message) for w in caught if issubclass(w.category, StoreRecoveryWarning)]
    return bookings, notices


def _save_response(result: BookingResult) -> SaveResponseSchema:
    conflicts = [ConflictSchema.from_warning(c) for c in result.conflicts]
    if not result.saved:
        raise HTTPException(
            status_code=409,
            detail={
                "reason": "This booking conflicts with an existing booking for the same service",
                "conflicts": [c.model_dump(mode="json") for c in conflicts],
            },
        )
    return SaveResponseSchema(booking=BookingSchema.from_entity(result.booking), conflicts=conflicts)


@router.get("/services", response_model=list[ServiceSchema])
def list_services(catalog: ServiceCatalogPort = Depends(get_service_catalog)) -> list[ServiceSchema]:
    return [ServiceSchema.from_entity(s) for s in catalog.list_services()]


@router.get("/bookings", response_model=BookingListSchema)
def list_bookings(
    q: str = "",
    service_id: str | None = None,
    status: BookingStatus | None = None,
    booking_date: date | None = Query(None, alias="date"),
    sort: SortOrder = SortOrder.DATE_ASC,
    engine: BookingEngine = Depends(get_booking_engine),
) -> BookingListSchema:
    try:
        bookings, notices = _load_reporting_recovery(
            lambda: engine.query(
                BookingQuery(search_text=q, service_id=service_id, status=status, date=booking_date, sort=sort)
            )
        )
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    return BookingListSchema(
        bookings=[BookingSchema.from_entity(b) for b in bookings],
        stats=StatsSchema.from_stats(summarize(bookings)),
        warnings=notices,
    )


@router.get("/bookings/export.csv")
def export_bookings(
    q: str = "",
    service_id: str | None = None,
    status: BookingStatus | None = None,
    booking_date: date | None = Query(None, alias="date"),
    sort: SortOrder = SortOrder.NONE,
    engine: BookingEngine = Depends(get_booking_engine),
) -> Response:
    try:
        stored, notices = _load_reporting_recovery(engine.list_bookings)
        bookings = query_bookings(
            stored,
            BookingQuery(search_text=q, service_id=service_id, status=status, date=booking_date, sort=sort),
        )
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    headers = {"Content-Disposition": f'attachment; filename="{export_filename()}"'}
    if notices:
        headers["X-Store-Recovered"] = "true"
    return Response(content=export_csv(bookings), media_type="text/csv", headers=headers)


@router.post("/bookings", status_code=201, response_model=SaveResponseSchema)
def create_booking(
    payload: BookingDraftSchema,
    engine: BookingEngine = Depends(get_booking_engine),
) -> SaveResponseSchema:
    try:
        result = engine.create(payload.to_draft(), override_conflicts=payload.override_conflicts)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.reason) from e
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    return _save_response(result)


@router.get("/bookings/{booking_id}", response_model=BookingSchema)
def get_booking(booking_id: str, engine: BookingEngine = Depends(get_booking_engine)) -> BookingSchema:
    try:
        return BookingSchema.from_entity(engine.get(booking_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except PersistenceError as e:
        raise _persistence_failure(e) from e


@router.put("/bookings/{booking_id}", response_model=SaveResponseSchema)
def update_booking(
    booking_id: str,
    payload: BookingDraftSchema,
    engine: BookingEngine = Depends(get_booking_engine),
) -> SaveResponseSchema:
    try:
        result = engine.update(booking_id, payload.to_draft(), override_conflicts=payload.override_conflicts)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=e.reason) from e
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    return _save_response(result)


@router.post("/bookings/{booking_id}/status", response_model=BookingSchema)
def set_booking_status(
    booking_id: str,
    payload: StatusUpdateSchema,
    engine: BookingEngine = Depends(get_booking_engine),
) -> BookingSchema:
    try:
        return BookingSchema.from_entity(engine.set_status(booking_id, payload.status))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e
    except PersistenceError as e:
        raise _persistence_failure(e) from e


@router.delete("/bookings/{booking_id}", status_code=204)
def delete_booking(booking_id: str, engine: BookingEngine = Depends(get_booking_engine)) -> Response:
    try:
        engine.delete(booking_id)
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    return Response(status_code=204)


@router.delete("/bookings", status_code=204)
def clear_bookings(engine: BookingEngine = Depends(get_booking_engine)) -> Response:
    try:
        engine.clear_all()
    except PersistenceError as e:
        raise _persistence_failure(e) from e
    return Response(status_code=204)
