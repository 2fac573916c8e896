"""
MongoRecordStore - RecordStore backed by motor collections.

Collections: users, appointments, loans, services. Dates are stored as
strings (`YYYY-MM-DD` for appointments, `YYYY-MM-DD[ HH:MM]` for loans), so
range hints are plain lexicographic comparisons.
"""

import datetime as dt
from typing import Any, Dict, List, Optional

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase

from spa_api.models.appointment import AppointmentStatus
from spa_api.models.user import Role


def _to_record(doc: Dict[str, Any]) -> Dict[str, Any]:
    """Expose Mongo's _id as a string id."""
    doc = dict(doc)
    if "_id" in doc:
        doc["id"] = str(doc.pop("_id"))
    return doc


def _owner_filter(worker_id: Optional[str]) -> Dict[str, Any]:
    if worker_id is None:
        return {}
    # worker_id may be stored either as ObjectId or as its string form
    if ObjectId.is_valid(worker_id):
        return {"worker_id": {"$in": [worker_id, ObjectId(worker_id)]}}
    return {"worker_id": worker_id}


def _date_filter(start: Optional[dt.date], end: Optional[dt.date]) -> Dict[str, Any]:
    bounds = {}
    if start is not None:
        bounds["$gte"] = start.isoformat()
    if end is not None:
        # first string past every time of day on end
        bounds["$lt"] = (end + dt.timedelta(days=1)).isoformat()
    return {"date": bounds} if bounds else {}


class MongoRecordStore:
    """Record access for the settlement engine and appointment intake."""

    def __init__(self, db: AsyncIOMotorDatabase):
        self.db = db
        self.users = db["users"]
        self.appointments = db["appointments"]
        self.loans = db["loans"]
        self.services = db["services"]

    async def list_completed_appointments(
        self,
        worker_id: Optional[str] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[Dict[str, Any]]:
        """Completed appointments, oldest first."""
        query = {
            "status": AppointmentStatus.COMPLETED.value,
            **_owner_filter(worker_id),
            **_date_filter(start, end),
        }
        docs = await self.appointments.find(query).sort([("date", 1), ("time", 1)]).to_list(None)
        return [_to_record(doc) for doc in docs]

    async def list_loans(
        self,
        worker_id: Optional[str] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[Dict[str, Any]]:
        """Loans, newest first."""
        query = {**_owner_filter(worker_id), **_date_filter(start, end)}
        docs = await self.loans.find(query).sort("date", -1).to_list(None)
        return [_to_record(doc) for doc in docs]

    async def list_workers(self, role: Role = Role.WORKER) -> List[Dict[str, Any]]:
        docs = await self.users.find(
            {"role": role.value}, {"password_hash": 0}
        ).sort("name", 1).to_list(None)
        return [_to_record(doc) for doc in docs]

    async def get_worker(self, worker_id: str) -> Optional[Dict[str, Any]]:
        """Get a user by id, whatever its role."""
        key = ObjectId(worker_id) if ObjectId.is_valid(worker_id) else worker_id
        doc = await self.users.find_one({"_id": key}, {"password_hash": 0})
        return _to_record(doc) if doc else None

    async def list_services(self) -> List[Dict[str, Any]]:
        docs = await self.services.find({}).sort("name", 1).to_list(None)
        return [_to_record(doc) for doc in docs]

    async def add_appointment(self, record: Dict[str, Any]) -> str:
        result = await self.appointments.insert_one(dict(record))
        return str(result.inserted_id)
