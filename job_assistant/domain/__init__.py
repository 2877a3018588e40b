"""领域层模型与协议。

包含：
- models: Message / Conversation / JobSummary / Reply 等数据模型。
- conversation: ConversationStore 存储抽象与会话 ID 生成器类型。
- exceptions: 业务异常类型定义。
"""
