#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
财务相关路由
"""

from typing import Optional

from fastapi import APIRouter, Depends

from ..models.client import DarazClient
from ..models.errors import MissingParameterError, UpstreamError
from ..models.schemas import TransactionDetailsResponse
from ..models.services import get_unpaid_payouts, query_transaction_details
from .common import bad_request, get_client, upstream_failure

router = APIRouter(tags=["finance"])

@router.get("/get-daraz-income-details")
def get_daraz_income_details(
    access_token: Optional[str] = None,
    storeName: Optional[str] = None,
    created_after: Optional[str] = None,
    client: DarazClient = Depends(get_client)
):
    """未结算的结算单"""
    try:
        statements = get_unpaid_payouts(client, access_token, store_name=storeName, created_after=created_after)
        return {"financeRespone": statements}
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch income details", e)

@router.get("/get-daraz-query-income-details", response_model=TransactionDetailsResponse)
def get_daraz_query_income_details(
    access_token: Optional[str] = None,
    trade_order_id: Optional[str] = None,
    end_time: Optional[str] = None,
    start_time: Optional[str] = None,
    trans_type: Optional[str] = None,
    limit: Optional[str] = None,
    trade_order_line_id: Optional[str] = None,
    client: DarazClient = Depends(get_client)
):
    """交易明细及按订单汇总的金额"""
    try:
        data = query_transaction_details(
            client,
            access_token,
            start_time=start_time,
            end_time=end_time,
            trans_type=trans_type,
            trade_order_id=trade_order_id,
            limit=limit,
            trade_order_line_id=trade_order_line_id
        )
    except MissingParameterError as e:
        return bad_request(e)
    except UpstreamError as e:
        return upstream_failure("Failed to fetch Transaction details", e)

    return {
        "message": "Transaction details retrieved successfully",
        "data": data,
        "error": None,
        "statusCode": 200
    }
