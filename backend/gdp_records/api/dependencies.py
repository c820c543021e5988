"""API Dependencies — request-scoped collaborators injected with Depends.

Invariants:
    - One SqlGdpRecordStore per request, bound to that request's session
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from gdp_records.infrastructure.database import get_db
from gdp_records.infrastructure.gdp_record_store import SqlGdpRecordStore


async def get_record_store(
    db: AsyncSession = Depends(get_db),
) -> SqlGdpRecordStore:
    return SqlGdpRecordStore(db)
