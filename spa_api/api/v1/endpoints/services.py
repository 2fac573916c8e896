from typing import List

from fastapi import APIRouter, Depends

from spa_api.api.deps import get_record_store
from spa_api.core.auth import Identity, get_identity
from spa_api.models.service import Service
from spa_api.repositories.record_store import RecordStore
from spa_api.utils.record_validation import coerce_all, coerce_service

router = APIRouter()


@router.get("/", response_model=List[Service])
async def list_services(
    identity: Identity = Depends(get_identity),
    store: RecordStore = Depends(get_record_store),
):
    """Service catalog with default prices. Malformed entries are left out."""
    return coerce_all(await store.list_services(), coerce_service, [])
