#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
运行配置

app_key / app_secret 等凭证只在启动时读取一次，构造成 RelayConfig 后注入到客户端和应用中。
"""

import os
from typing import List, Optional, Mapping

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

DEFAULT_BASE_URL = "https://api.daraz.pk/rest"
DEFAULT_TIMEOUT = 30.0
DEFAULT_CHUNK_SIZE = 50
SIGN_METHOD = "sha256"


class ConfigError(Exception):
    """配置缺失或格式错误"""


class RelayConfig(BaseModel):
    """中转服务配置"""
    app_key: str
    app_secret: str
    base_url: str = DEFAULT_BASE_URL
    timeout: float = DEFAULT_TIMEOUT
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, le=DEFAULT_CHUNK_SIZE)
    sign_method: str = SIGN_METHOD
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 3000

    def redacted_key(self) -> str:
        """日志中使用的脱敏app_key"""
        if len(self.app_key) > 4:
            return f"{self.app_key[:2]}...{self.app_key[-2:]}"
        return "[REDACTED]"


def _read_number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw)
    except ValueError:
        raise ConfigError(f"环境变量 {name} 格式错误: {raw!r}")


def load_config(env: Optional[Mapping[str, str]] = None, dotenv: bool = True) -> RelayConfig:
    """从环境变量（以及 .env 文件）构造配置"""
    if env is None:
        if dotenv:
            load_dotenv()
        env = os.environ

    app_key = env.get("DARAZ_APP_KEY", "").strip()
    app_secret = env.get("DARAZ_APP_SECRET", "").strip()

    missing = []
    if not app_key:
        missing.append("DARAZ_APP_KEY")
    if not app_secret:
        missing.append("DARAZ_APP_SECRET")
    if missing:
        raise ConfigError(f"缺少Daraz凭证配置: {', '.join(missing)}")

    origins = env.get("RELAY_CORS_ORIGINS", "*")

    try:
        return RelayConfig(
            app_key=app_key,
            app_secret=app_secret,
            base_url=env.get("DARAZ_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            timeout=_read_number(env, "DARAZ_TIMEOUT", DEFAULT_TIMEOUT, float),
            chunk_size=_read_number(env, "DARAZ_CHUNK_SIZE", DEFAULT_CHUNK_SIZE, int),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=env.get("RELAY_LOG_LEVEL", "INFO").upper(),
            host=env.get("RELAY_HOST", "0.0.0.0"),
            port=_read_number(env, "RELAY_PORT", 3000, int),
        )
    except ValidationError as e:
        raise ConfigError(f"配置校验失败: {e}")
