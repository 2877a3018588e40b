from typing import Callable, Optional, Protocol

from .models import Conversation


# 会话 ID 生成器：无参调用，返回新的 session_id
IdGenerator = Callable[[], str]


class ConversationStore(Protocol):
    """会话的持久化存储抽象。

    实现者在读写失败时抛出 StorageFailure；
    查询不到会话时返回 None，而不是抛异常。
    """

    def get_conversation(self, session_id: str) -> Optional[Conversation]:
        ...

    def save_conversation(self, conversation: Conversation) -> None:
        ...

    def delete_conversation(self, session_id: str) -> bool:
        ...

    def find_latest(self, session_id: Optional[str], user_id: Optional[str] = None) -> Optional[Conversation]:
        ...
