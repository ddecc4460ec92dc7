from fastapi import APIRouter, Depends, HTTPException, Query, Response

from activity_scheduler.api.v1.schemas import (
    AvailabilityRequestSchema,
    AvailabilityResponseSchema,
    BookingCreateSchema,
    BookingSchema,
    CalendarResponseSchema,
    DayCellSchema,
    DecisionRequestSchema,
    ForceDecisionRequestSchema,
    StatsSchema,
)
from activity_scheduler.application.exceptions import (
    BookingPermissionError,
    ConflictError,
    NotFoundError,
    StateError,
    ValidationError,
)
from activity_scheduler.application.ports.booking_store import BookingStorePort
from activity_scheduler.application.use_cases.booking_workflow import BookingWorkflow
from activity_scheduler.application.use_cases.live_calendar import LiveCalendar
from activity_scheduler.application.utils.calendar_math import parse_year_month
from activity_scheduler.domain.entities.booking import BookingFilter, BookingRequest, BookingStatus
from activity_scheduler.wiring.dependencies import get_booking_store, get_booking_workflow, get_live_calendar

router = APIRouter()


@router.post("/bookings", response_model=BookingSchema, status_code=201)
def submit_booking(
    req: BookingCreateSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
):
    try:
        booking = workflow.submit(BookingRequest(**req.model_dump()))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return BookingSchema.from_booking(booking)


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(
    resource: str | None = Query(None),
    department: str | None = Query(None),
    teacher_id: str | None = Query(None),
    status: str | None = Query(None),
    date_from: str | None = Query(None),
    date_to: str | None = Query(None),
    store: BookingStorePort = Depends(get_booking_store),
):
    try:
        parsed_status = BookingStatus.parse(status) if status else None
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Unknown status '{status}'")

    bookings = store.list(
        BookingFilter(
            resource=resource,
            department=department,
            teacher_id=teacher_id,
            status=parsed_status,
            date_from=date_from,
            date_to=date_to,
        )
    )
    return [BookingSchema.from_booking(b) for b in bookings]


@router.get("/bookings/stats", response_model=StatsSchema)
def booking_stats(calendar: LiveCalendar = Depends(get_live_calendar)):
    return StatsSchema.from_stats(calendar.stats())


@router.post("/bookings/availability", response_model=AvailabilityResponseSchema)
def check_availability(
    req: AvailabilityRequestSchema,
    calendar: LiveCalendar = Depends(get_live_calendar),
):
    try:
        result = calendar.check(req.model_dump())
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return AvailabilityResponseSchema.from_result(result)


@router.post("/bookings/{booking_id}/decision", response_model=BookingSchema)
def decide_booking(
    booking_id: str,
    req: DecisionRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
):
    try:
        booking = workflow.decide(booking_id, req.outcome.value, req.reviewer_id, req.reason)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BookingSchema.from_booking(booking)


@router.post("/bookings/{booking_id}/force-decision", response_model=BookingSchema)
def force_decide_booking(
    booking_id: str,
    req: ForceDecisionRequestSchema,
    workflow: BookingWorkflow = Depends(get_booking_workflow),
):
    try:
        booking = workflow.force_decide(booking_id, req.outcome.value, req.reviewer_id, req.reason)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StateError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return BookingSchema.from_booking(booking)


@router.delete("/bookings/{booking_id}", status_code=204)
def withdraw_booking(
    booking_id: str,
    requester_id: str = Query(...),
    workflow: BookingWorkflow = Depends(get_booking_workflow),
):
    try:
        workflow.withdraw(booking_id, requester_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except BookingPermissionError as e:
        raise HTTPException(status_code=403, detail=str(e))
    except StateError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return Response(status_code=204)


@router.get("/calendar/{year_month}", response_model=CalendarResponseSchema)
def month_calendar(
    year_month: str,
    resource: str | None = Query(None),
    calendar: LiveCalendar = Depends(get_live_calendar),
):
    try:
        year, month = parse_year_month(year_month)
        cells = calendar.project_month((year, month), resource=resource)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return CalendarResponseSchema(
        month=f"{year:04d}-{month:02d}",
        resource=resource,
        days=[DayCellSchema.from_cell(c) for c in cells],
    )
