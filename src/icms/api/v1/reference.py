from typing import Any

from fastapi import APIRouter, Response

from ...core.dependencies import DbSession
from ...services.reference_data import ReferenceDataReader, departments_reader, positions_reader

DATA_SOURCE_HEADER = "X-Data-Source"

router = APIRouter()


async def _read(reader: ReferenceDataReader, response: Response) -> list[dict[str, Any]]:
    data = await reader.read()
    response.headers[DATA_SOURCE_HEADER] = data.source
    return data.items


@router.get("/departments")
async def list_departments(db: DbSession, response: Response) -> list[dict[str, Any]]:
    """Database rows, or the built-in list while the database is unreachable."""
    return await _read(departments_reader(db), response)


@router.get("/positions")
async def list_positions(db: DbSession, response: Response) -> list[dict[str, Any]]:
    return await _read(positions_reader(db), response)
