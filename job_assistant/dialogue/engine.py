"""对话引擎核心模块。

把关键词提取、意图识别、职位检索、回复生成与会话存储串成一次完整的对话轮次。
单轮处理是同步的：要么在一次调用内完成，要么抛出异常且不提交任何会话状态。
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from job_assistant.catalog.base import JobCatalog
from job_assistant.config.settings import settings
from job_assistant.dialogue.composer import ResponseComposer
from job_assistant.dialogue.intents import IntentResolver
from job_assistant.dialogue.query import JobQueryBuilder
from job_assistant.dialogue.session import SessionStore
from job_assistant.domain.conversation import ConversationStore, IdGenerator
from job_assistant.domain.exceptions import InvalidInput
from job_assistant.domain.models import (
    HAS_SEARCHED_JOBS,
    LAST_INTENT,
    LAST_QUERY,
    Context,
    Conversation,
    Message,
    Reply,
)
from job_assistant.flows.graph import build_turn_graph


@dataclass
class TurnResult:
    conversation: Conversation
    reply: Reply
    intent: str
    is_new: bool = False

    @property
    def session_id(self) -> str:
        return self.conversation.session_id


class DialogueEngine:
    def __init__(
        self,
        store: ConversationStore,
        catalog: JobCatalog,
        id_generator: Optional[IdGenerator] = None,
        resolver: Optional[IntentResolver] = None,
        composer: Optional[ResponseComposer] = None,
        query_builder: Optional[JobQueryBuilder] = None,
    ):
        self._sessions = SessionStore(store, id_generator=id_generator)
        self._resolver = resolver or IntentResolver()
        self._composer = composer or ResponseComposer(currency_symbol=settings.currency_symbol)
        self._builder = query_builder or JobQueryBuilder(
            catalog,
            max_results=settings.max_job_results,
            preview_chars=settings.description_preview_chars,
            fallback_search=settings.fallback_search_enabled,
        )
        self._graph = build_turn_graph(self._resolver, self._builder, self._composer)

    def respond(self, message: str, context: Optional[Context] = None) -> Dict[str, Any]:
        """执行一次不落盘的回复生成，返回图的最终状态（含 intent 与 reply）。"""

        return self._graph.invoke({"message": message, "context": dict(context or {})})

    def handle_message(
        self,
        message: Any,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> TurnResult:
        """处理一条用户消息。

        Args:
            message: 用户输入（必须是非空文本）
            session_id: 会话ID（可选，不提供则生成新会话）
            user_id: 已认证用户ID（可选，仅在会话尚未绑定用户时写入）

        Returns:
            TurnResult，包含更新后的会话和本轮回复

        Raises:
            InvalidInput: message 缺失或不是文本
            StorageFailure: 会话读写失败
        """
        if not isinstance(message, str) or not message.strip():
            raise InvalidInput()

        conv, is_new = self._sessions.get_or_create(session_id)
        state = self.respond(message, conv.context)
        reply: Reply = state["reply"]
        intent = state["intent"]

        turn_context = {
            HAS_SEARCHED_JOBS: bool(conv.context.get(HAS_SEARCHED_JOBS)) or len(reply.jobs) > 0,
            LAST_QUERY: message,
            LAST_INTENT: intent,
        }
        self._sessions.append(
            conv,
            Message.user(message),
            Message.assistant(reply.message, reply.to_payload()),
            context=turn_context,
            user_id=user_id,
        )
        return TurnResult(conversation=conv, reply=reply, intent=intent, is_new=is_new)

    def history(self, session_id: Optional[str], user_id: Optional[str] = None) -> Optional[Conversation]:
        return self._sessions.history(session_id, user_id)

    def clear(self, session_id: Optional[str]) -> bool:
        return self._sessions.clear(session_id)
