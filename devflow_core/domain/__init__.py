"""领域层模型与协议。

包含：
- models: Provider 边界上的 ChatMessage / ChatRequest / ChatResult 模型。
- segments: 助手回复分段后的 Segment 类型。
- conversation: 只追加的会话日志 ConversationLog。
- exceptions: 业务异常类型定义。
"""
