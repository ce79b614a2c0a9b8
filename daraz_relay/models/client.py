#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Daraz开放平台HTTP客户端

每次调用都会重新生成 timestamp 并签名，GET 参数放在 query string，
POST 参数以表单方式提交。
"""

import json
import logging
import time
from typing import Any, Callable, Dict, Mapping, Optional

import requests

from .config import RelayConfig
from .errors import UpstreamError
from .signer import sign, stringify

logger = logging.getLogger(__name__)


def current_millis() -> int:
    return int(time.time() * 1000)


def dump_body(value: Any) -> str:
    """POST请求体序列化（紧凑JSON，签名和发送使用同一个字符串）"""
    return json.dumps(value, separators=(',', ':'), ensure_ascii=False)


class DarazClient:
    """带签名的Daraz接口客户端"""

    def __init__(
        self,
        config: RelayConfig,
        session: Optional[requests.Session] = None,
        clock: Optional[Callable[[], int]] = None
    ):
        self.config = config
        self.session = session or requests.Session()
        self._clock = clock or current_millis

    def signed_params(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        access_token: Optional[str] = None,
        body: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """组装公共参数并计算签名，返回需要放进 query string 的参数"""
        query = {
            "app_key": self.config.app_key,
            "sign_method": self.config.sign_method,
            "timestamp": str(self._clock()),
        }
        if access_token:
            query["access_token"] = access_token

        for key, value in (params or {}).items():
            if value is None:
                continue
            query[key] = stringify(value)

        # 请求体作为伪参数参与签名，但不放进 query string
        to_sign = dict(query)
        if body:
            to_sign.update(body)

        query["sign"] = sign(path, to_sign, self.config.app_secret)
        return query

    def get(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        access_token: Optional[str] = None
    ) -> Dict[str, Any]:
        query = self.signed_params(path, params, access_token)
        return self._send("GET", path, params=query)

    def post(
        self,
        path: str,
        params: Optional[Mapping[str, Any]] = None,
        access_token: Optional[str] = None,
        body: Optional[Mapping[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        POST请求

        body 的每个值会被序列化为JSON字符串，例如 {"readyToShipReq": {...}}。
        没有 body 时，所有签名参数都以表单提交。
        """
        if not body:
            form = self.signed_params(path, params, access_token)
            return self._send("POST", path, data=form)

        form = {name: dump_body(value) for name, value in body.items()}
        query = self.signed_params(path, params, access_token, body=form)
        return self._send("POST", path, params=query, data=form)

    def _send(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, str]] = None,
        data: Optional[Dict[str, str]] = None
    ) -> Dict[str, Any]:
        url = f"{self.config.base_url}{path}"
        logger.debug("调用Daraz接口: %s %s", method, path)

        try:
            resp = self.session.request(
                method,
                url,
                params=params,
                data=data,
                timeout=self.config.timeout,
            )
        except requests.RequestException as e:
            logger.error("请求Daraz失败: %s %s - %s", method, path, e)
            raise UpstreamError(f"请求失败: {e}")

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        if resp.status_code >= 400:
            logger.error("Daraz返回错误状态码: %s %s - %s", method, path, resp.status_code)
            raise UpstreamError(
                f"请求失败: {resp.status_code}",
                details=payload if payload is not None else resp.text,
                status_code=resp.status_code,
            )

        if payload is None:
            raise UpstreamError("响应不是合法的JSON", details=resp.text, status_code=resp.status_code)

        return payload
