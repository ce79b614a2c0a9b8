#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
异常定义
"""

from typing import Any, Optional


class MissingParameterError(ValueError):
    """请求缺少必填参数，不会发起任何上游调用"""


class UpstreamError(Exception):
    """Daraz接口调用失败（网络错误、非2xx响应或业务code非0）"""

    def __init__(self, message: str, details: Any = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.details = details if details is not None else message
        self.status_code = status_code


class MissingAccessTokenError(UpstreamError):
    """换取token的响应中没有access_token"""
