"""OpenRouter Provider 适配器。

本模块负责：

1. 接收统一的 ChatRequest。
2. 将其转换为 OpenRouter chat/completions 请求格式。
3. 调用 HTTP 接口并处理网络/API 异常。
4. 将响应 JSON 解析为统一的 ChatResult 结构。

- URL: {base_url}/chat/completions
- 认证: Authorization: Bearer <api_key>
"""

from typing import Any, Dict

import httpx

from devflow_core.config.settings import settings
from devflow_core.domain.exceptions import ApiError, NetworkError, RateLimitError, ValidationError
from devflow_core.domain.models import ChatChoice, ChatMessage, ChatRequest, ChatResult, ChatUsage
from devflow_core.infrastructure.logging.logger import logger
from devflow_core.providers.registry import OPENROUTER_CONFIG, ModelConfig


class OpenRouterClient:
    """OpenRouter 提供方客户端实现。"""

    name = "openrouter"

    def __init__(self, cfg=settings):
        # Settings 里包含 base_url、api_key、超时等配置
        self._settings = cfg

    def chat(self, req: ChatRequest) -> ChatResult:
        """执行一次非流式对话调用。

        步骤：
        1. 读取模型配置（logical model -> provider model）。
        2. 构造 HTTP 请求 payload。
        3. 发送请求并捕获网络错误/限流/服务端错误。
        4. 解析为 ChatResult；choices 为空时原样返回，由上层决定如何处理。
        """

        if not getattr(self._settings, "openrouter_api_key", None):
            # 配置缺失走 ValidationError，方便上层统一处理
            raise ValidationError(code="MISSING_API_KEY", message="OPENROUTER_API_KEY not set")
        try:
            model_cfg = OPENROUTER_CONFIG.models[req.model]
        except KeyError:
            raise ValidationError(code="UNKNOWN_MODEL", message=f"Unknown model: {req.model!r}")
        payload = self._build_payload(req, model_cfg)
        base = getattr(self._settings, "openrouter_base_url", None) or OPENROUTER_CONFIG.base_url
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.post(
                    f"{base}/chat/completions",
                    json=payload,
                    headers={
                        "Authorization": f"Bearer {self._settings.openrouter_api_key}",
                        "Content-Type": "application/json",
                    },
                )
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            raise NetworkError(code="NETWORK_ERROR", message=str(e), http_status=500, details=str(e))
        if resp.status_code == 429:
            # 限流错误交给上层做重试/退避
            raise RateLimitError(
                code="RATE_LIMIT",
                message="OpenRouter rate limit",
                http_status=429,
                details=self._error_details(resp),
            )
        if resp.status_code >= 400:
            details = self._error_details(resp)
            logger.warning(
                "openrouter.api_error",
                extra={"extra": {"status": resp.status_code, "model": model_cfg.provider_model}},
            )
            raise ApiError(
                code="API_ERROR",
                message="Error en la respuesta de la API",
                http_status=resp.status_code,
                details=details,
            )
        # 2xx 但响应体不是预期结构（非 JSON、非对象等）同样归为 ApiError
        try:
            data = resp.json()
            if not isinstance(data, dict):
                raise TypeError(f"unexpected response body type: {type(data).__name__}")
            return self._parse_response(data, req)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(
                "openrouter.invalid_response",
                extra={"extra": {"status": resp.status_code, "error": str(e)}},
            )
            raise ApiError(
                code="INVALID_RESPONSE",
                message="Error en la solicitud a la API",
                http_status=500,
                details=resp.text,
            )

    def _build_payload(self, req: ChatRequest, model_cfg: ModelConfig) -> dict:
        """将 ChatRequest 转成 OpenRouter 所需的请求 JSON。"""

        payload: Dict[str, Any] = {
            "model": model_cfg.provider_model,
            "messages": [{"role": m.role, "content": m.content} for m in req.messages],
            "max_tokens": req.max_tokens or model_cfg.max_tokens,
        }
        if req.temperature is not None:
            payload["temperature"] = req.temperature
        if req.top_p is not None:
            payload["top_p"] = req.top_p
        return payload

    def _parse_response(self, data: dict, req: ChatRequest) -> ChatResult:
        """将原始响应 JSON 解析为统一的 ChatResult。"""

        choices: list[ChatChoice] = []
        for i, ch in enumerate(data.get("choices") or []):
            msg = ch.get("message") or {}
            cm = ChatMessage(role=msg.get("role") or "assistant", content=msg.get("content") or "")
            choices.append(ChatChoice(index=ch.get("index", i), message=cm, finish_reason=ch.get("finish_reason")))
        usage_raw = data.get("usage") or {}
        usage = None
        if usage_raw:
            usage = ChatUsage(
                prompt_tokens=usage_raw.get("prompt_tokens", 0),
                completion_tokens=usage_raw.get("completion_tokens", 0),
                total_tokens=usage_raw.get("total_tokens", 0),
            )
        return ChatResult(provider=self.name, model=req.model, choices=choices, usage=usage, raw=data)

    @staticmethod
    def _error_details(resp) -> Any:
        """提取错误响应体；JSON 解析失败时保留原始文本。"""

        try:
            return resp.json()
        except ValueError:
            return resp.text
