#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Daraz中转API服务主入口

启动: python -m daraz_relay.main
或: uvicorn daraz_relay.main:create_app --factory
"""

import logging
from datetime import datetime
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse

from .models.client import DarazClient
from .models.config import RelayConfig, load_config
from .routes.auth import router as auth_router
from .routes.finance import router as finance_router
from .routes.fulfillment import router as fulfillment_router
from .routes.orders import router as orders_router

logger = logging.getLogger(__name__)


def create_app(config: Optional[RelayConfig] = None, client: Optional[DarazClient] = None) -> FastAPI:
    """创建应用，配置和客户端在这里注入"""
    if config is None:
        config = load_config()

    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )

    app = FastAPI(
        title="Daraz中转API",
        description="Daraz订单、财务、发货接口签名转发与聚合",
        version="1.0.0"
    )
    app.state.config = config
    app.state.client = client or DarazClient(config)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # 注册路由
    app.include_router(auth_router)
    app.include_router(orders_router)
    app.include_router(finance_router)
    app.include_router(fulfillment_router)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("未处理的异常: %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "message": "Something went wrong",
                "data": None,
                "error": str(exc),
                "statusCode": 500
            }
        )

    @app.get("/")
    def root():
        """根路径"""
        return {
            "message": "Daraz中转API服务",
            "version": "1.0.0",
            "endpoints": {
                "order_details": "/get-daraz-order-details",
                "income_details": "/get-daraz-query-income-details",
                "docs": "/docs"
            }
        }

    @app.get("/test", response_class=PlainTextResponse)
    def test():
        return "API is working fine and sound!"

    @app.get("/health")
    def health_check():
        """健康检查"""
        return {"status": "healthy", "timestamp": datetime.now().isoformat()}

    logger.info("Daraz中转服务已创建: base_url=%s app_key=%s", config.base_url, config.redacted_key())
    return app


if __name__ == "__main__":
    import uvicorn
    settings = load_config()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)
