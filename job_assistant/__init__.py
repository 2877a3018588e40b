"""Job Assistant 顶层包。

该包提供求职应用内置聊天助手的对话引擎，
包括配置加载、领域模型、关键词与意图识别、职位目录适配、
回复生成、会话持久化以及对外服务接口等能力。
"""

from job_assistant.dialogue.engine import DialogueEngine, TurnResult

__all__ = ["DialogueEngine", "TurnResult"]
