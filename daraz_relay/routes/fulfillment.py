#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
物流 / 发货相关路由
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Body, Depends

from ..models.client import DarazClient
from ..models.errors import MissingParameterError, UpstreamError
from ..models.services import get_order_logistics, mark_ready_to_ship, pack_and_ready_to_ship
from .common import bad_request, get_client, upstream_failure

router = APIRouter(tags=["fulfillment"])

@router.get("/get-daraz-order-logistics")
def get_daraz_order_logistics(
    access_token: Optional[str] = None,
    order_id: Optional[str] = None,
    package_id_list: Optional[str] = None,
    locale: Optional[str] = None,
    client: DarazClient = Depends(get_client)
):
    """包裹物流轨迹"""
    try:
        return get_order_logistics(client, access_token, order_id, package_id_list, locale)
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch logistics info", e)

@router.post("/make-order-rts")
def make_order_rts(
    access_token: Optional[str] = None,
    ready_to_ship_req: Optional[Dict[str, Any]] = Body(default=None),
    client: DarazClient = Depends(get_client)
):
    """标记包裹为RTS，请求体: {"packages": [{"package_id": ...}]}"""
    try:
        return mark_ready_to_ship(client, access_token, ready_to_ship_req or {})
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to mark package(s) as RTS", e)

@router.post("/make-order-pack-and-rts")
def make_order_pack_and_rts(
    access_token: Optional[str] = None,
    pack_req: Optional[Dict[str, Any]] = Body(default=None),
    client: DarazClient = Depends(get_client)
):
    """打包并标记RTS，请求体: {"pack_order_list": [...], ...}"""
    try:
        return pack_and_ready_to_ship(client, access_token, pack_req or {})
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to pack orders and mark as RTS", e)
