from fastapi import APIRouter, Body, Depends, Request, Response, status
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError as SchemaValidationError
from typing import Dict, List, Optional, Type, TypeVar

from ...exceptions import ValidationError
from ...models.order import OrderStatus
from ...schemas.order import OrderCreate, OrderResponse, OrderStatusUpdate, OrderUpdate
from ...schemas.validators import (
    CREATED_BY_MAX_LENGTH,
    normalize_text,
    parse_int_string,
    parse_status,
)
from ...services.enrichment import enrich_order
from ...services.identity import IdentityResolver
from ...services.order_service import OrderService
from ...services.status_machine import transition_table
from ..dependencies import get_identity_resolver, get_order_service

router = APIRouter(prefix="/orders", tags=["orders"])

RequestT = TypeVar("RequestT", bound=BaseModel)


def _parse_order_id(value: str) -> int:
    order_id = parse_int_string(value)
    if order_id is None or order_id <= 0:
        raise ValidationError("Invalid order id")
    return order_id


def _body(payload: Optional[RequestT], model: Type[RequestT]) -> RequestT:
    """Пустое тело или null проверяются как {}"""
    if payload is not None:
        return payload
    try:
        return model.model_validate({})
    except SchemaValidationError as e:
        raise RequestValidationError(e.errors())


def _single_query_value(request: Request, name: str) -> Optional[str]:
    values = request.query_params.getlist(name)
    if not values:
        return None
    if len(values) > 1:
        raise ValidationError(f"{name} must be a single value")
    return values[0]


@router.get("", response_model=List[OrderResponse])
async def list_orders(
        request: Request,
        order_service: OrderService = Depends(get_order_service)
):
    """Список заказов, фильтры status и createdBy (по одному значению)"""
    raw_status = _single_query_value(request, "status")
    raw_created_by = _single_query_value(request, "createdBy")

    try:
        order_status: Optional[OrderStatus] = None
        created_by: Optional[str] = None
        if raw_status is not None:
            order_status = parse_status(raw_status)
        if raw_created_by is not None:
            created_by = normalize_text(raw_created_by, "createdBy", max_length=CREATED_BY_MAX_LENGTH)
    except ValueError as e:
        raise ValidationError(str(e))

    orders = await order_service.list_orders(status=order_status, created_by=created_by)
    return [enrich_order(order) for order in orders]


@router.get("/transitions", response_model=Dict[str, List[str]])
async def get_status_transitions():
    """Таблица допустимых переходов статусов"""
    return transition_table()


@router.get("/{order_id}", response_model=OrderResponse)
async def get_order(
        order_id: str,
        order_service: OrderService = Depends(get_order_service)
):
    """Получить заказ по ID"""
    order = await order_service.get_order(_parse_order_id(order_id))
    return enrich_order(order)


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
        payload: Optional[OrderCreate] = Body(None),
        order_service: OrderService = Depends(get_order_service),
        identity: IdentityResolver = Depends(get_identity_resolver)
):
    """Создать заказ, при необходимости с позициями из каталога"""
    payload = _body(payload, OrderCreate)
    created_by = identity.resolve(payload.created_by)
    order = await order_service.create_order(payload, created_by)
    return enrich_order(order)


@router.put("/{order_id}", response_model=OrderResponse)
async def update_order(
        order_id: str,
        payload: Optional[OrderUpdate] = Body(None),
        order_service: OrderService = Depends(get_order_service)
):
    """Обновить скалярные поля заказа"""
    payload = _body(payload, OrderUpdate)
    order = await order_service.update_order(_parse_order_id(order_id), payload)
    return enrich_order(order)


@router.put("/{order_id}/status", response_model=OrderResponse)
async def update_order_status(
        order_id: str,
        payload: Optional[OrderStatusUpdate] = Body(None),
        order_service: OrderService = Depends(get_order_service)
):
    """Сменить статус заказа"""
    payload = _body(payload, OrderStatusUpdate)
    order = await order_service.change_status(_parse_order_id(order_id), payload.status)
    return enrich_order(order)


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_order(
        order_id: str,
        order_service: OrderService = Depends(get_order_service)
):
    """Удалить заказ вместе с позициями"""
    await order_service.delete_order(_parse_order_id(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)
