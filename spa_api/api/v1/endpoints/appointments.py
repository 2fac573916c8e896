import logging

from fastapi import APIRouter, Depends, HTTPException, status

from spa_api.api.deps import get_period_resolver, get_record_store
from spa_api.core.auth import Identity, get_identity
from spa_api.core.errors import NotFound
from spa_api.models.appointment import Appointment, AppointmentStatus
from spa_api.models.user import Role
from spa_api.repositories.record_store import RecordStore
from spa_api.schemas.appointment import AppointmentCreate
from spa_api.services.period_resolver import PeriodResolver
from spa_api.utils.record_validation import (
    coerce_all,
    coerce_appointment,
    coerce_service,
    coerce_worker,
    validate_schedule,
)

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/", response_model=Appointment, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    appointment_in: AppointmentCreate,
    identity: Identity = Depends(get_identity),
    store: RecordStore = Depends(get_record_store),
    resolver: PeriodResolver = Depends(get_period_resolver),
):
    """Book a pending appointment; past slots are rejected."""
    validate_schedule(appointment_in.date, appointment_in.time, resolver)

    worker_id = identity.worker_id
    if identity.is_admin and appointment_in.worker_id:
        worker_id = appointment_in.worker_id
    raw_worker = await store.get_worker(worker_id)
    if raw_worker is None or coerce_worker(raw_worker).role != Role.WORKER:
        raise NotFound(worker_id)

    service_name = appointment_in.service_name
    price = appointment_in.price
    if appointment_in.service_id:
        catalog = {s.id: s for s in coerce_all(await store.list_services(), coerce_service, [])}
        entry = catalog.get(appointment_in.service_id)
        if entry is None:
            raise HTTPException(status_code=404, detail="Service not found")
        service_name = service_name or entry.name
        if price is None:
            price = entry.price
    if price is None:
        raise HTTPException(status_code=400, detail="Either a price or a catalog service is required")

    appointment = coerce_appointment({
        "worker_id": worker_id,
        "client_name": appointment_in.client_name,
        "client_phone": appointment_in.client_phone,
        "service_name": service_name or "",
        "price": price,
        "date": appointment_in.date,
        "time": appointment_in.time,
        "status": AppointmentStatus.PENDING,
    })
    appointment_id = await store.add_appointment(appointment.model_dump(mode="json", exclude={"id"}))
    logger.info(f"Booked appointment {appointment_id} for worker {worker_id} on {appointment.date}")
    return appointment.model_copy(update={"id": appointment_id})
