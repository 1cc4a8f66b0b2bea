# app/routers/blocked_times_routes.py

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from app.deps import require_admin
from app.models import BlockedTime, User
from app.schemas import BlockedTimeCreate, BlockedTimePublic
from app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/blocked-times",
    tags=["blocked-times"],
)


@router.get("", response_model=List[BlockedTimePublic])
def list_blocked_times(store: Storage = Depends(get_storage)):
    return store.list_blocked_times()


@router.post("", response_model=BlockedTimePublic, status_code=201)
def create_blocked_time(
    block: BlockedTimeCreate,
    store: Storage = Depends(get_storage),
    admin: User = Depends(require_admin),
):
    db_block = store.insert_blocked_time(
        BlockedTime(
            date=block.date,
            start_time=block.start_time,
            end_time=block.end_time,
            reason=block.reason,
        )
    )
    logger.info(
        "Block %s on %s %s-%s created by %s",
        db_block.id, db_block.date, db_block.start_time or "", db_block.end_time or "", admin.username,
    )
    return db_block


@router.delete("/{block_id}", status_code=204)
def delete_blocked_time(
    block_id: int,
    store: Storage = Depends(get_storage),
    _: User = Depends(require_admin),
):
    if not store.delete_blocked_time(block_id):
        raise HTTPException(status_code=404, detail="Blocked time not found")
    return Response(status_code=204)
