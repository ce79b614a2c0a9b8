#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Daraz请求签名

签名串 = 接口路径 + 按字节序排序后的 key + value 依次拼接（无分隔符），
再用 app_secret 做 HMAC-SHA256，结果转大写十六进制。
"""

import hashlib
import hmac
from decimal import Decimal
from typing import Any, Mapping


class SigningError(TypeError):
    """参数值无法转换为签名字符串"""


def stringify(value: Any) -> str:
    """把参数值转换成签名和发送时使用的字符串"""
    # bool 是 int 的子类，必须先判断
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if value.is_integer():
            return str(int(value))
        return repr(value)
    if isinstance(value, Decimal):
        return str(value)
    raise SigningError(f"不支持的签名参数类型: {type(value).__name__}")


def canonical_string(path: str, params: Mapping[str, Any]) -> str:
    """构造待签名字符串"""
    parts = [path]
    for key in sorted(params, key=lambda k: k.encode("utf-8")):
        parts.append(key + stringify(params[key]))
    return "".join(parts)


def sign(path: str, params: Mapping[str, Any], secret: str) -> str:
    """计算 sign 参数"""
    digest = hmac.new(
        secret.encode("utf-8"),
        canonical_string(path, params).encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()
    return digest.upper()
