from typing import Any

from fastapi import status

from ....core.dependencies import DbSession, EntityId
from ....mappers.serializer import serialize, serialize_many
from ....schemas.finance import (
    PropertyUKCreate,
    PropertyUKUpdate,
    RealEstateCreate,
    RealEstateUpdate,
    TenantCreate,
    TenantUpdate,
)
from ....services.finance_service import PropertyUKService, RealEstateService
from ....validators.request_validators import parse_id
from ...helpers import envelope
from .records import FinanceResource, finance_router, record_status, text

real_estate_router = finance_router(FinanceResource(
    label="Property",
    service=RealEstateService,
    create_schema=RealEstateCreate,
    update_schema=RealEstateUpdate,
    filters={"status": ("status", record_status), "propertyType": ("property_type", text)},
))

properties_uk_router = finance_router(FinanceResource(
    label="Property",
    service=PropertyUKService,
    create_schema=PropertyUKCreate,
    update_schema=PropertyUKUpdate,
    filters={"status": ("status", record_status), "propertyType": ("property_type", text)},
))


# ======================================================================
# Tenants
# ======================================================================

@properties_uk_router.get("/{id}/tenants")
async def list_tenants(id: EntityId, db: DbSession) -> dict[str, Any]:
    tenants, summary = await PropertyUKService(db).list_tenants(id)
    return envelope(serialize_many(tenants), summary=summary)


@properties_uk_router.post("/{id}/tenants", status_code=status.HTTP_201_CREATED)
async def add_tenant(id: EntityId, body: TenantCreate, db: DbSession) -> dict[str, Any]:
    """Marks the property rented. A primary tenant demotes the previous one."""
    tenant = await PropertyUKService(db).add_tenant(id, body.to_fields())
    return envelope(serialize(tenant))


@properties_uk_router.put("/{id}/tenants/{tenant_id}")
async def update_tenant(id: EntityId, tenant_id: str, body: TenantUpdate, db: DbSession) -> dict[str, Any]:
    tenant = await PropertyUKService(db).update_tenant(id, parse_id(tenant_id, "tenantId"), body.to_fields())
    return envelope(serialize(tenant))


@properties_uk_router.delete("/{id}/tenants/{tenant_id}")
async def delete_tenant(id: EntityId, tenant_id: str, db: DbSession) -> dict[str, Any]:
    await PropertyUKService(db).delete_tenant(id, parse_id(tenant_id, "tenantId"))
    return {"success": True, "message": "Tenant deleted successfully"}
