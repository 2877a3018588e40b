"""以 session_id 为键的会话状态管理。"""

import secrets
from typing import Mapping, Optional, Tuple

from job_assistant.domain.conversation import ConversationStore, IdGenerator
from job_assistant.domain.models import Conversation, Message, utcnow


def generate_session_id() -> str:
    """128 random bits as 32 lowercase hex characters."""
    return secrets.token_hex(16)


class SessionStore:
    def __init__(self, store: ConversationStore, id_generator: Optional[IdGenerator] = None):
        self._store = store
        self._new_id = id_generator or generate_session_id

    def get_or_create(self, session_id: Optional[str] = None) -> Tuple[Conversation, bool]:
        """Load the conversation for ``session_id`` or start a new one.

        A new conversation is not persisted until the first ``append``.
        """
        if session_id:
            existing = self._store.get_conversation(session_id)
            if existing is not None:
                return existing, False
        now = utcnow()
        conv = Conversation(
            session_id=session_id or self._new_id(),
            user_id=None,
            messages=[],
            context={},
            created_at=now,
            last_active=now,
        )
        return conv, True

    def append(
        self,
        conversation: Conversation,
        user_message: Message,
        assistant_message: Message,
        context: Optional[Mapping] = None,
        user_id: Optional[str] = None,
    ) -> Conversation:
        if user_message.role != "user" or assistant_message.role != "assistant":
            raise ValueError("append expects a (user, assistant) message pair")
        conversation.messages.extend([user_message, assistant_message])
        conversation.last_active = utcnow()
        if context:
            conversation.context.update(context)
        if user_id and not conversation.user_id:
            conversation.user_id = user_id
        self._store.save_conversation(conversation)
        return conversation

    def clear(self, session_id: Optional[str]) -> bool:
        if not session_id:
            return False
        return self._store.delete_conversation(session_id)

    def history(self, session_id: Optional[str], user_id: Optional[str] = None) -> Optional[Conversation]:
        if not session_id and not user_id:
            return None
        return self._store.find_latest(session_id, user_id)
