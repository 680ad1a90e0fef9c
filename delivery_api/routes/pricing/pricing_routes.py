"""
Pricing Rule Routes
===================

Routes untuk pricing rule CRUD (admin) dan cost calculation
"""

from fastapi import APIRouter, Depends, Query, status
from typing import Optional

from ...services import ServiceRegistry, Actor
from ...schemas import PricingRuleCreateSchema, PricingRuleUpdateSchema, CostCalculationSchema
from ...dependencies import get_service_registry, get_current_user
from ...responses import APIResponse

router = APIRouter()


@router.get("/rules")
async def get_pricing_rules(
    service_type_id: Optional[int] = Query(None, gt=0),
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1, le=100),
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Get semua pricing rule (aktif maupun tidak)

    **Requires admin role**
    """
    result = await service_registry.pricing_rule_service.list_rules(
        current_user, service_type_id=service_type_id, page=page, limit=limit
    )

    return APIResponse.paginated(result, message="Pricing rules retrieved successfully")


@router.post("/rules", status_code=status.HTTP_201_CREATED)
async def create_pricing_rule(
    rule_data: PricingRuleCreateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Create pricing rule baru

    **Parameters:**
    - service_type_id: Service type pemilik tier
    - weight_from / weight_to: Range berat inklusif, tidak boleh overlap dengan rule aktif lain
    - price: Harga per kg
    - fragile_surcharge / valuable_surcharge: Biaya tambahan flat (optional)
    """
    rule = await service_registry.pricing_rule_service.add_rule(
        **rule_data.model_dump(),
        actor=current_user
    )

    return APIResponse.success(
        data=rule,
        message="Pricing rule created successfully"
    )


@router.put("/rules/{rule_id}")
async def update_pricing_rule(
    rule_id: int,
    rule_data: PricingRuleUpdateSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    rule = await service_registry.pricing_rule_service.update_rule(
        rule_id, rule_data.model_dump(exclude_unset=True), current_user
    )

    return APIResponse.success(
        data=rule,
        message="Pricing rule updated successfully"
    )


@router.delete("/rules/{rule_id}")
async def delete_pricing_rule(
    rule_id: int,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    await service_registry.pricing_rule_service.delete_rule(rule_id, current_user)

    return APIResponse.success(message="Pricing rule deleted successfully")


@router.post("/calculate-cost")
async def calculate_cost(
    cost_data: CostCalculationSchema,
    current_user: Actor = Depends(get_current_user),
    service_registry: ServiceRegistry = Depends(get_service_registry)
):
    """
    Hitung ongkos kirim dari tier yang cocok

    **Returns:**
    - base_price, weight, fragile_fee, valuable_fee, total_cost
    """
    breakdown = await service_registry.cost_calculator.calculate_cost(
        cost_data.service_type_id,
        cost_data.weight,
        is_fragile=cost_data.is_fragile,
        is_valuable=cost_data.is_valuable,
        actor=current_user
    )

    return APIResponse.success(
        data=breakdown,
        message="Cost calculated successfully"
    )
