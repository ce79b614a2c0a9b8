#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pydantic数据模型定义
"""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional, Dict, Any, Union

# ---------------------------------------------------------------------------
# 接口请求 / 响应模型
# ---------------------------------------------------------------------------

class GetTokenRequest(BaseModel):
    """换取access_token请求模型"""
    code: Optional[Union[str, int]] = None

class OrderDetailsResponse(BaseModel):
    """订单详情聚合响应模型"""
    countTotal: int
    orderItems: List[Dict[str, Any]]

class TransactionSummary(BaseModel):
    totalTransactions: int
    totalOrders: int
    totalAmount: float

class TransactionDetailsData(BaseModel):
    total: List[Dict[str, Any]]
    transactions: List[Dict[str, Any]]
    summary: TransactionSummary

class TransactionDetailsResponse(BaseModel):
    """交易明细响应模型"""
    message: str
    data: TransactionDetailsData
    error: Optional[str] = None
    statusCode: int = 200

class OrderBalance(BaseModel):
    """按订单号汇总后的金额"""
    order_no: Union[str, int]
    total_amount: float = 0.0

# ---------------------------------------------------------------------------
# Daraz上游响应模型（未声明的字段原样保留）
# ---------------------------------------------------------------------------

class DarazRecord(BaseModel):
    model_config = ConfigDict(extra="allow")

class DarazEnvelope(DarazRecord):
    """Daraz响应的公共外层，成功时 code 为 "0" """
    code: Optional[Union[str, int]] = None
    message: Optional[str] = None
    request_id: Optional[str] = None

    def ok(self) -> bool:
        return self.code is None or str(self.code) == "0"

class OrderRecord(DarazRecord):
    """/orders/get 返回的订单"""
    order_id: Union[int, str]
    order_number: Optional[Union[int, str]] = None

class OrdersListData(DarazRecord):
    count: Optional[int] = None
    countTotal: Optional[int] = None
    orders: List[OrderRecord] = Field(default_factory=list)

class OrdersListResponse(DarazEnvelope):
    data: Optional[OrdersListData] = None

class OrderItem(DarazRecord):
    """订单中的单个商品行"""
    status: Optional[str] = None
    access_token: Optional[str] = None

class OrderItemsRecord(DarazRecord):
    """/orders/items/get 返回的订单及其商品行"""
    order_id: Union[int, str]
    order_number: Optional[Union[int, str]] = None
    order_items: List[OrderItem] = Field(default_factory=list)

class OrderItemsResponse(DarazEnvelope):
    data: Optional[List[OrderItemsRecord]] = None

class TransactionRecord(DarazRecord):
    """/finance/transaction/details/get 返回的交易流水"""
    order_no: Optional[Any] = None
    amount: Optional[Any] = None

class TransactionsResponse(DarazEnvelope):
    data: Optional[List[TransactionRecord]] = None

class PayoutStatement(DarazRecord):
    """/finance/payout/status/get 返回的结算单"""
    paid: Optional[Union[str, int]] = None

class PayoutStatusResponse(DarazEnvelope):
    data: Optional[List[PayoutStatement]] = None

class TokenResponse(DarazEnvelope):
    access_token: Optional[str] = None

class SellerInfo(DarazRecord):
    short_code: Optional[str] = None

class SellerResponse(DarazEnvelope):
    data: Optional[SellerInfo] = None
