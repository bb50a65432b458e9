"""统一的对话与结果数据模型。

本模块定义了 Provider 边界上共享的标准数据结构：

- ChatMessage: 一条发给模型或模型返回的消息。
- ChatRequest: 发给底层 LLM Provider 的完整请求。
- ChatResult: 从 Provider 解析后的统一响应结果。

Provider 适配器（如 OpenRouterClient）只依赖这些模型，
并负责在各自的 API JSON 和这些模型之间做转换。
"""

from dataclasses import dataclass
from typing import Literal, Optional, List


# LLM 消息角色类型（与 OpenAI / OpenRouter 的 role 字段对应）
Role = Literal["system", "user", "assistant"]


@dataclass
class ChatMessage:
    """一条对话消息，既可用于请求，也可用于响应。

    - role: 消息角色，如 system/user/assistant。
    - content: 纯文本内容。
    """

    role: Role
    content: str


@dataclass
class ChatRequest:
    """一次完整的聊天请求。"""

    provider: str  # 逻辑 Provider 名，如 "openrouter"
    model: str  # 逻辑模型名，如 "devflow-chat"（再由 registry 映射为真实模型名）
    messages: List[ChatMessage]
    temperature: Optional[float] = None
    top_p: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class ChatUsage:
    """Provider 返回的 token 统计信息（统一格式）。"""

    prompt_tokens: int
    completion_tokens: int
    total_tokens: int


@dataclass
class ChatChoice:
    """单个候选回答（目前只使用 index=0 的一条）。"""

    index: int
    message: ChatMessage
    finish_reason: Optional[str] = None


@dataclass
class ChatResult:
    """一次对话调用的最终结果。

    - provider: 逻辑 Provider 名（如 "openrouter"）。
    - model: 逻辑模型名（如 "devflow-chat"）。
    - choices: 候选回答，可能为空（由上层转换为 CompletionError）。
    - usage: 可选的 token 使用统计。
    - raw: 原始响应 JSON，用于调试或错误详情。
    """

    provider: str
    model: str
    choices: List[ChatChoice]
    usage: Optional[ChatUsage] = None
    raw: Optional[dict] = None

    @property
    def first_content(self) -> Optional[str]:
        """第一个候选回答的文本；没有候选时返回 None。"""

        if not self.choices:
            return None
        return self.choices[0].message.content
