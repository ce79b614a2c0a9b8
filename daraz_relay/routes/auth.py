#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
授权相关路由
"""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from ..models.client import DarazClient
from ..models.errors import MissingAccessTokenError, MissingParameterError, UpstreamError
from ..models.schemas import GetTokenRequest
from ..models.services import create_access_token
from .common import bad_request, get_client, upstream_failure

router = APIRouter(tags=["auth"])

@router.post("/get-daraz-token")
def get_daraz_token(request: Optional[GetTokenRequest] = None, client: DarazClient = Depends(get_client)):
    """授权code换取access_token，同时返回店铺信息"""
    try:
        return create_access_token(client, request.code if request else None)
    except MissingParameterError as e:
        return bad_request(e)
    except MissingAccessTokenError as e:
        return JSONResponse(status_code=500, content={"error": e.message})
    except UpstreamError as e:
        return upstream_failure("Failed to fetch token or seller data", e)
