"""对外 API 服务模块。

提供两层接口供界面或 HTTP 层调用：

- generate(): 无状态的一次性生成，对应“描述 -> 代码”接口。
- ChatSession: 持有一个 ConversationLog，串起 提交 -> 生成 -> 追加回复 的完整流程。
"""

import time
from typing import List, Optional
from uuid import uuid4

from devflow_core.config.settings import settings
from devflow_core.domain.conversation import ConversationEntry, ConversationLog
from devflow_core.domain.exceptions import BusinessError, CompletionError, ValidationError
from devflow_core.domain.models import ChatMessage, ChatRequest
from devflow_core.infrastructure.logging.logger import logger
from devflow_core.providers import create_provider
from devflow_core.providers.base import ProviderClient
from devflow_core.rendering.turns import RenderedTurn, render_log


def generate(
    description: str,
    provider: Optional[ProviderClient] = None,
    model: Optional[str] = None,
) -> str:
    """把一段自然语言描述发给模型并返回原始回复文本。

    Args:
        description: 用户描述，不能为空白
        provider: Provider 客户端（可选，默认按配置创建）
        model: 逻辑模型名（可选）

    Returns:
        模型返回的原始文本，不做任何修改

    Raises:
        ValidationError: 描述为空
        CompletionError: 响应中没有任何候选回答
        以及 Provider 抛出的 NetworkError / ApiError / RateLimitError
    """
    if not description or not description.strip():
        raise ValidationError(
            code="EMPTY_DESCRIPTION",
            message="La descripción es obligatoria",
            http_status=400,
        )
    client = provider or create_provider()
    req = ChatRequest(
        provider=client.name,
        model=model or settings.default_model,
        messages=[ChatMessage(role="user", content=description)],
        temperature=settings.temperature,
    )
    result = client.chat(req)
    content = result.first_content
    if content is None:
        raise CompletionError(
            code="NO_COMPLETION",
            message="No se pudo generar el código",
            http_status=500,
            details=result.raw,
        )
    return content


class ChatSession:
    """一次界面会话：一个只追加的日志 + 一个 Provider。

    同一会话内应串行提交；并发提交时回复的先后顺序由调用方负责。
    """

    def __init__(
        self,
        provider: ProviderClient,
        log: Optional[ConversationLog] = None,
        model: Optional[str] = None,
    ):
        self._provider = provider
        self._log = log if log is not None else ConversationLog()
        self._model = model
        self.id = f"s-{uuid4().hex}"

    @property
    def log(self) -> ConversationLog:
        return self._log

    def submit(self, text: str) -> Optional[ConversationEntry]:
        """提交一条用户输入并等待模型回复。

        Returns:
            追加的助手记录；输入为空白时返回 None（不追加任何记录）

        Raises:
            BusinessError: 生成失败，此时不追加助手记录
        """
        user_entry = self._log.append_user(text)
        if user_entry is None:
            return None

        start_time = time.time()
        log_ctx = {"session_id": self.id, "provider": self._provider.name}
        try:
            reply = generate(text, provider=self._provider, model=self._model)
        except BusinessError as e:
            logger.error(
                f"session.submit failed: {e.code}",
                extra={"extra": {**log_ctx, "code": e.code, "http_status": e.http_status}},
            )
            raise
        entry = self._log.append_assistant(reply)
        logger.info(
            "session.submit",
            extra={"extra": {**log_ctx, "elapsed_seconds": round(time.time() - start_time, 2)}},
        )
        return entry

    def turns(self) -> List[RenderedTurn]:
        return render_log(self._log.entries())


_session: Optional[ChatSession] = None


def get_default_session() -> ChatSession:
    """获取默认会话实例（单例），Provider 按配置创建。"""
    global _session
    if _session is None:
        _session = ChatSession(provider=create_provider())
    return _session
