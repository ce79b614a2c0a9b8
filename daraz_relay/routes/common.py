#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
路由公共依赖和错误响应
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from ..models.client import DarazClient
from ..models.config import RelayConfig
from ..models.errors import MissingParameterError, UpstreamError

logger = logging.getLogger(__name__)


def get_client(request: Request) -> DarazClient:
    """应用启动时注入的Daraz客户端"""
    return request.app.state.client


def get_config(request: Request) -> RelayConfig:
    return request.app.state.config


def bad_request(error: MissingParameterError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": str(error)})


def upstream_failure(message: str, error: UpstreamError) -> JSONResponse:
    """上游调用失败，错误详情原样返回"""
    logger.error("%s: %s", message, error.details)
    return JSONResponse(status_code=500, content={"error": message, "details": error.details})
