#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
订单相关路由
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..models.client import DarazClient
from ..models.config import RelayConfig
from ..models.errors import MissingParameterError, UpstreamError
from ..models.schemas import OrderDetailsResponse
from ..models.services import fetch_order_details, get_order_items, list_orders
from .common import bad_request, get_client, get_config, upstream_failure

router = APIRouter(tags=["orders"])

@router.get("/get-daraz-orders")
def get_daraz_orders(
    access_token: Optional[str] = None,
    created_after: Optional[str] = None,
    status: Optional[str] = None,
    client: DarazClient = Depends(get_client)
):
    """订单列表（原样返回Daraz结果）"""
    try:
        return list_orders(client, access_token, status=status, created_after=created_after)
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch orders", e)

@router.get("/get-order-items")
def get_daraz_order_items(
    access_token: Optional[str] = None,
    order_ids: Optional[str] = None,
    client: DarazClient = Depends(get_client)
):
    """订单商品行（原样返回Daraz结果）"""
    try:
        return get_order_items(client, access_token, order_ids=order_ids)
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch order items", e)

@router.get("/get-daraz-order-details", response_model=OrderDetailsResponse)
def get_daraz_order_details(
    access_token: Optional[str] = None,
    update_after: Optional[str] = None,
    created_after: Optional[str] = None,
    status: Optional[str] = None,
    client: DarazClient = Depends(get_client),
    config: RelayConfig = Depends(get_config)
):
    """订单列表 + 分批查询商品行"""
    try:
        return fetch_order_details(
            client,
            access_token,
            status=status,
            created_after=created_after,
            update_after=update_after,
            chunk_size=config.chunk_size
        )
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch order details", e)

@router.get("/get-daraz-delivered-order-details", response_model=OrderDetailsResponse)
def get_daraz_delivered_order_details(
    access_token: Optional[str] = None,
    update_after: Optional[str] = None,
    update_before: Optional[str] = None,
    created_after: Optional[str] = None,
    status: Optional[str] = None,
    client: DarazClient = Depends(get_client),
    config: RelayConfig = Depends(get_config)
):
    """订单详情，商品行带上access_token并只保留与status一致的商品行"""
    try:
        return fetch_order_details(
            client,
            access_token,
            status=status,
            created_after=created_after,
            update_after=update_after,
            update_before=update_before,
            item_status=status,
            tag_items=True,
            chunk_size=config.chunk_size
        )
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch order details", e)
