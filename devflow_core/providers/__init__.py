"""LLM Provider 集成层。

该包下的模块负责：
- 定义 Provider 抽象接口 (base)。
- 维护 Provider 与模型配置 (registry)。
- 提供具体实现 (openrouter_client)。
"""

from typing import Callable, Dict, Optional

from devflow_core.config.settings import settings
from devflow_core.domain.exceptions import ValidationError
from devflow_core.providers.base import ProviderClient
from devflow_core.providers.openrouter_client import OpenRouterClient
from devflow_core.providers.registry import get_provider_config


# registry 中的 Provider 名 -> 客户端构造函数
_CLIENT_FACTORIES: Dict[str, Callable[..., ProviderClient]] = {
    "openrouter": OpenRouterClient,
}


def create_provider(name: Optional[str] = None) -> ProviderClient:
    """根据名称创建 Provider 实例，默认取配置中的 provider。"""

    provider_name = name or getattr(settings, "default_provider", "openrouter")
    try:
        cfg = get_provider_config(provider_name)
    except KeyError:
        raise ValidationError(code="UNKNOWN_PROVIDER", message=f"Unknown provider: {provider_name!r}")
    return _CLIENT_FACTORIES[cfg.name](settings)
