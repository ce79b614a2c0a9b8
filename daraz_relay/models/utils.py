#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
工具函数

分批、合并、过滤、金额汇总等纯函数，不做任何网络调用。
"""

import math
import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

from .schemas import OrderBalance, OrderItemsRecord, PayoutStatement, TransactionRecord

# 与 JavaScript parseFloat 一致：只取字符串开头的数字部分
_LEADING_NUMBER = re.compile(r"[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def compact_params(**params: Any) -> Dict[str, Any]:
    """去掉值为None或空字符串的参数"""
    return {k: v for k, v in params.items() if v is not None and v != ""}


def chunk_ids(ids: Sequence[Any], size: int = 50) -> List[List[Any]]:
    """把ID列表按顺序切成不超过size个的小批次"""
    if size < 1:
        raise ValueError(f"批次大小必须大于0: {size}")
    return [list(ids[i:i + size]) for i in range(0, len(ids), size)]


def format_id_list(chunk: Iterable[Any]) -> str:
    """order_ids 参数格式: [id1,id2,id3]"""
    return "[" + ",".join(str(i) for i in chunk) + "]"


def merge_chunk_results(results: Iterable[List[Any]]) -> List[Any]:
    """按批次顺序拼接每批的结果"""
    merged = []
    for chunk_result in results:
        merged.extend(chunk_result)
    return merged


def tag_items_with_token(orders: List[OrderItemsRecord], access_token: str) -> List[OrderItemsRecord]:
    """给每个商品行带上调用方的access_token"""
    return [
        order.model_copy(update={
            "order_items": [
                item.model_copy(update={"access_token": access_token})
                for item in order.order_items
            ]
        })
        for order in orders
    ]


def filter_items_by_status(orders: List[OrderItemsRecord], status: Optional[str]) -> List[OrderItemsRecord]:
    """只保留指定状态的商品行，商品行全部被过滤掉的订单直接丢弃"""
    filtered = []
    for order in orders:
        items = [item for item in order.order_items if item.status == status]
        if items:
            filtered.append(order.model_copy(update={"order_items": items}))
    return filtered


def parse_amount(value: Any) -> Optional[float]:
    """解析金额字符串（去掉千分位逗号），无法解析时返回None"""
    text = str(value).replace(",", "").strip()
    match = _LEADING_NUMBER.match(text)
    if not match:
        return None
    amount = float(match.group(0).replace("Infinity", "inf"))
    if math.isnan(amount):
        return None
    return amount


def calculate_order_balances(transactions: Iterable[TransactionRecord]) -> List[OrderBalance]:
    """按order_no汇总交易金额，保持订单号首次出现的顺序"""
    balances: Dict[str, OrderBalance] = {}

    for record in transactions:
        if not record.order_no or not record.amount:
            continue
        # 订单号只接受字符串或整数，"123" 和 123 视为同一订单
        if isinstance(record.order_no, bool) or not isinstance(record.order_no, (str, int)):
            continue

        amount = parse_amount(record.amount)
        if amount is None:
            continue

        key = str(record.order_no)
        if key not in balances:
            balances[key] = OrderBalance(order_no=record.order_no, total_amount=0.0)
        balances[key].total_amount += amount

    return list(balances.values())


def summarize_balances(transactions: Sequence[Any], balances: Sequence[OrderBalance]) -> Dict[str, Any]:
    return {
        "totalTransactions": len(transactions),
        "totalOrders": len(balances),
        "totalAmount": sum(b.total_amount for b in balances),
    }


def unpaid_statements(statements: Iterable[PayoutStatement], store_name: Optional[str]) -> List[Dict[str, Any]]:
    """筛选未结算(paid == "0")的结算单并标注店铺名"""
    unpaid = []
    for statement in statements:
        if str(statement.paid) != "0":
            continue
        row = statement.model_dump(exclude_unset=True)
        row["storeName"] = store_name
        unpaid.append(row)
    return unpaid


def extract_package_ids(pack_response: Dict[str, Any]) -> List[Any]:
    """从打包接口的响应中提取package_id"""
    package_ids = []

    result = pack_response.get("result") if isinstance(pack_response, dict) else None
    pack_data = result.get("data") if isinstance(result, dict) else None
    if not isinstance(pack_data, dict):
        return package_ids

    pack_order_list = pack_data.get("pack_order_list")
    if isinstance(pack_order_list, list):
        for order in pack_order_list:
            item_list = order.get("order_item_list") if isinstance(order, dict) else None
            if not isinstance(item_list, list):
                continue
            for item in item_list:
                if isinstance(item, dict) and item.get("package_id"):
                    package_ids.append(item["package_id"])

    packages = pack_data.get("packages")
    if isinstance(packages, list):
        for package in packages:
            if isinstance(package, dict) and package.get("package_id"):
                package_ids.append(package["package_id"])

    if pack_data.get("package_id"):
        package_ids.append(pack_data["package_id"])

    return package_ids
