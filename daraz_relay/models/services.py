#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
业务逻辑服务层

client 只需要提供 get(path, params, access_token) 和 post(path, params, access_token, body)，
测试中可以替换成假的客户端。
"""

import logging
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import ValidationError

from .config import DEFAULT_CHUNK_SIZE
from .errors import MissingAccessTokenError, MissingParameterError, UpstreamError
from .schemas import (
    DarazEnvelope,
    OrderItemsRecord,
    OrderItemsResponse,
    OrdersListResponse,
    PayoutStatusResponse,
    SellerResponse,
    TokenResponse,
    TransactionsResponse,
)
from .utils import (
    calculate_order_balances,
    chunk_ids,
    compact_params,
    extract_package_ids,
    filter_items_by_status,
    format_id_list,
    merge_chunk_results,
    summarize_balances,
    tag_items_with_token,
    unpaid_statements,
)

logger = logging.getLogger(__name__)

TOKEN_CREATE_PATH = "/auth/token/create"
SELLER_PATH = "/seller/get"
ORDERS_PATH = "/orders/get"
ORDER_ITEMS_PATH = "/orders/items/get"
PAYOUT_STATUS_PATH = "/finance/payout/status/get"
TRANSACTION_DETAILS_PATH = "/finance/transaction/details/get"
LOGISTICS_PATH = "/order/logistic/get"
PACK_PATH = "/order/fulfill/pack"
RTS_PATH = "/order/package/rts"

Envelope = TypeVar("Envelope", bound=DarazEnvelope)


def require_access_token(access_token: Optional[str]) -> str:
    if not access_token:
        raise MissingParameterError("Missing access_token")
    return access_token


def parse_response(model: Type[Envelope], payload: Any, path: str) -> Envelope:
    """校验上游响应，业务code非0或结构不符时抛出UpstreamError"""
    try:
        parsed = model.model_validate(payload)
    except ValidationError as e:
        logger.error("Daraz响应格式错误: %s - %s", path, e)
        raise UpstreamError(f"响应格式错误: {path}", details=payload)

    if not parsed.ok():
        logger.error("Daraz返回错误: %s - code=%s message=%s", path, parsed.code, parsed.message)
        raise UpstreamError(parsed.message or f"API返回错误: {parsed.code}", details=payload)

    return parsed


def create_access_token(client, code: Optional[Union[str, int]]) -> Dict[str, Any]:
    """用授权code换取access_token，并获取店铺信息"""
    if not code:
        raise MissingParameterError("Missing code")

    token_data = client.post(TOKEN_CREATE_PATH, {"code": str(code)})
    token = parse_response(TokenResponse, token_data, TOKEN_CREATE_PATH)
    if not token.access_token:
        raise MissingAccessTokenError("Access token not received from Daraz", details=token_data)

    seller_data = client.get(SELLER_PATH, access_token=token.access_token)
    seller = parse_response(SellerResponse, seller_data, SELLER_PATH)

    return {
        "token": token_data,
        "seller": seller_data,
        "seller_id": seller.data.short_code if seller.data else None
    }


def list_orders(client, access_token: Optional[str], status: Optional[str] = None,
                created_after: Optional[str] = None) -> Dict[str, Any]:
    """订单列表，原样返回上游结果"""
    access_token = require_access_token(access_token)
    params = compact_params(status=status, created_after=created_after)
    return client.get(ORDERS_PATH, params, access_token=access_token)


def get_order_items(client, access_token: Optional[str], order_ids: Optional[str] = None) -> Dict[str, Any]:
    """订单商品行，原样返回上游结果"""
    access_token = require_access_token(access_token)
    return client.get(ORDER_ITEMS_PATH, compact_params(order_ids=order_ids), access_token=access_token)


def fetch_items_in_chunks(client, access_token: str, order_ids: List[Any],
                          chunk_size: int = DEFAULT_CHUNK_SIZE) -> List[OrderItemsRecord]:
    """分批查询商品行，逐批顺序请求，每批重新签名"""
    chunk_results = []
    for index, chunk in enumerate(chunk_ids(order_ids, chunk_size), 1):
        logger.debug("查询订单商品第 %d 批，共 %d 个订单", index, len(chunk))
        payload = client.get(ORDER_ITEMS_PATH, {"order_ids": format_id_list(chunk)}, access_token=access_token)
        items = parse_response(OrderItemsResponse, payload, ORDER_ITEMS_PATH)
        chunk_results.append(items.data or [])
    return merge_chunk_results(chunk_results)


def fetch_order_details(
    client,
    access_token: Optional[str],
    status: Optional[str] = None,
    created_after: Optional[str] = None,
    update_after: Optional[str] = None,
    update_before: Optional[str] = None,
    item_status: Optional[str] = None,
    tag_items: bool = False,
    chunk_size: int = DEFAULT_CHUNK_SIZE
) -> Dict[str, Any]:
    """
    订单列表 + 商品行聚合

    1. 调用 /orders/get 获取订单列表，没有订单时直接返回
    2. order_id 按 chunk_size 分批调用 /orders/items/get 并按顺序合并
    3. 可选：商品行标注 access_token、按商品行状态过滤（合并之后才过滤）
    """
    access_token = require_access_token(access_token)

    params = compact_params(
        status=status,
        created_after=created_after,
        update_after=update_after,
        update_before=update_before
    )
    payload = client.get(ORDERS_PATH, params, access_token=access_token)
    listing = parse_response(OrdersListResponse, payload, ORDERS_PATH)

    orders = listing.data.orders if listing.data else []
    if not orders:
        return {"countTotal": 0, "orderItems": []}

    order_ids = [order.order_id for order in orders]
    order_items = fetch_items_in_chunks(client, access_token, order_ids, chunk_size)

    if tag_items:
        order_items = tag_items_with_token(order_items, access_token)
    if item_status is not None:
        order_items = filter_items_by_status(order_items, item_status)

    logger.info("订单详情聚合完成: 订单 %d 个，返回 %d 个", len(orders), len(order_items))

    return {
        "countTotal": len(orders),
        "orderItems": [record.model_dump(exclude_unset=True) for record in order_items]
    }


def get_unpaid_payouts(client, access_token: Optional[str], store_name: Optional[str] = None,
                       created_after: Optional[str] = None) -> List[Dict[str, Any]]:
    """未结算的结算单列表"""
    access_token = require_access_token(access_token)
    payload = client.get(PAYOUT_STATUS_PATH, compact_params(created_after=created_after), access_token=access_token)
    payouts = parse_response(PayoutStatusResponse, payload, PAYOUT_STATUS_PATH)
    return unpaid_statements(payouts.data or [], store_name)


def query_transaction_details(
    client,
    access_token: Optional[str],
    start_time: Optional[str] = None,
    end_time: Optional[str] = None,
    trans_type: Optional[str] = None,
    trade_order_id: Optional[str] = None,
    limit: Optional[str] = None,
    trade_order_line_id: Optional[str] = None
) -> Dict[str, Any]:
    """交易明细 + 按订单汇总金额"""
    access_token = require_access_token(access_token)

    params = compact_params(
        start_time=start_time,
        end_time=end_time,
        trans_type=trans_type,
        trade_order_id=trade_order_id,
        limit=limit,
        trade_order_line_id=trade_order_line_id
    )
    payload = client.get(TRANSACTION_DETAILS_PATH, params, access_token=access_token)
    response = parse_response(TransactionsResponse, payload, TRANSACTION_DETAILS_PATH)

    transactions = response.data or []
    balances = calculate_order_balances(transactions)

    logger.info("交易明细: %d 条，涉及订单 %d 个", len(transactions), len(balances))

    return {
        "total": [balance.model_dump() for balance in balances],
        "transactions": [t.model_dump(exclude_unset=True) for t in transactions],
        "summary": summarize_balances(transactions, balances)
    }


def get_order_logistics(client, access_token: Optional[str], order_id: Optional[str],
                        package_id_list: Optional[str], locale: Optional[str]) -> Dict[str, Any]:
    if not access_token or not order_id or not package_id_list or not locale:
        raise MissingParameterError("Missing required parameters")

    params = {"order_id": order_id, "package_id_list": package_id_list, "locale": locale}
    return client.get(LOGISTICS_PATH, params, access_token=access_token)


def mark_ready_to_ship(client, access_token: Optional[str], ready_to_ship_req: Any) -> Dict[str, Any]:
    """标记包裹为待发货(RTS)"""
    access_token = require_access_token(access_token)
    if not isinstance(ready_to_ship_req, dict) or not isinstance(ready_to_ship_req.get("packages"), list):
        raise MissingParameterError("Missing or invalid packages")

    return client.post(RTS_PATH, access_token=access_token, body={"readyToShipReq": ready_to_ship_req})


def pack_and_ready_to_ship(client, access_token: Optional[str], pack_req: Any) -> Dict[str, Any]:
    """先打包，再把打包得到的包裹标记为RTS"""
    access_token = require_access_token(access_token)
    if not isinstance(pack_req, dict) or not isinstance(pack_req.get("pack_order_list"), list):
        raise MissingParameterError("Missing or invalid pack_order_list")

    pack_result = client.post(PACK_PATH, access_token=access_token, body={"packReq": pack_req})

    package_ids = extract_package_ids(pack_result)
    logger.info("打包完成，提取到 %d 个package_id", len(package_ids))

    if not package_ids:
        return {
            "message": "Orders packed successfully, but no package IDs found for RTS",
            "packResult": pack_result,
            "rtsResult": None
        }

    ready_to_ship_req = {"packages": [{"package_id": package_id} for package_id in package_ids]}
    rts_result = client.post(RTS_PATH, access_token=access_token, body={"readyToShipReq": ready_to_ship_req})

    return {
        "message": "Orders packed and marked as RTS successfully",
        "packResult": pack_result,
        "rtsResult": rts_result
    }
