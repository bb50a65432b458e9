"""页眉与当前用户身份。

身份信息只用于展示，由认证层显式传入，不读取任何全局状态。
"""

from dataclasses import dataclass
from typing import Optional

from devflow_core.config.settings import settings


ANONYMOUS_NAME = "Sin nombre"
LOGIN_LABEL = "Login"


@dataclass(frozen=True)
class Identity:
    email: Optional[str] = None
    display_name: Optional[str] = None

    @property
    def name(self) -> str:
        return self.display_name or ANONYMOUS_NAME

    @property
    def initial(self) -> str:
        """头像占位用的首字母。"""

        return self.name[:1].upper()


def header_text(identity: Optional[Identity], title: Optional[str] = None) -> str:
    """返回页眉文本：标题 + 用户信息；未登录时显示登录入口。"""

    title = title or settings.app_title
    if identity is None or not identity.email:
        return f"{title} | {LOGIN_LABEL}"
    return f"{title} | {identity.name} <{identity.email}>"
