import hashlib
import json
import os
import re
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from job_assistant.config.settings import settings
from job_assistant.domain.conversation import ConversationStore
from job_assistant.domain.exceptions import StorageFailure
from job_assistant.domain.models import Conversation
from job_assistant.infrastructure.logging.logger import logger


_SAFE_ID = re.compile(r"^[A-Za-z0-9_-]{1,128}$")


class JsonConversationStore(ConversationStore):
    """把每个会话保存为 conversations/<session>.json 的文件存储。

    含特殊字符的 session_id 以 sha256 命名，存放在 conversations/hashed/ 下；
    读取时校验文件内的 session_id，不一致则视为不存在。

    写入采用临时文件 + os.replace，单个会话文件的替换是原子的；
    同一会话的并发写入为“后写覆盖”。
    """

    def __init__(self, root: str | Path | None = None):
        self._root = Path(root or settings.storage_root).resolve()
        self._conv_root = self._root / "conversations"
        self._conv_root.mkdir(parents=True, exist_ok=True)
        # 不满足 _SAFE_ID 的 session_id 按哈希存放在子目录中，与普通 ID 的文件互不重叠
        self._hashed_root = self._conv_root / "hashed"
        self._hashed_root.mkdir(parents=True, exist_ok=True)

    def get_conversation(self, session_id: str) -> Optional[Conversation]:
        path = self._path_for(session_id)
        if not path.exists():
            return None
        conv = self._read(path)
        if conv.session_id != session_id:
            return None
        return conv

    def save_conversation(self, conversation: Conversation) -> None:
        path = self._path_for(conversation.session_id)
        tmp_path = path.parent / f"{path.stem}.{uuid4().hex}.json.tmp"
        try:
            tmp_path.write_text(json.dumps(conversation.to_dict(), ensure_ascii=False), encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.error("store.write_failed", extra={"extra": {"error": str(e)}})
            raise StorageFailure(code="STORE_WRITE_ERROR", message=str(e))

    def delete_conversation(self, session_id: str) -> bool:
        path = self._path_for(session_id)
        if not path.exists():
            return False
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.error("store.delete_failed", extra={"extra": {"error": str(e)}})
            raise StorageFailure(code="STORE_DELETE_ERROR", message=str(e))
        return True

    def find_latest(self, session_id: Optional[str], user_id: Optional[str] = None) -> Optional[Conversation]:
        """返回 session_id 匹配或 user_id 匹配的会话中最近活跃的一个。"""
        candidates: List[Conversation] = []
        if session_id:
            conv = self.get_conversation(session_id)
            if conv is not None:
                candidates.append(conv)
        if user_id:
            candidates.extend(c for c in self.list_conversations() if c.user_id == user_id)
        if not candidates:
            return None
        return max(candidates, key=lambda c: c.last_active)

    def list_conversations(self) -> List[Conversation]:
        items: List[Conversation] = []
        for path in sorted([*self._conv_root.glob("*.json"), *self._hashed_root.glob("*.json")]):
            try:
                items.append(self._read(path))
            except StorageFailure:
                continue
        return items

    def _path_for(self, session_id: str) -> Path:
        if _SAFE_ID.match(session_id):
            return self._conv_root / f"{session_id}.json"
        digest = hashlib.sha256(session_id.encode("utf-8")).hexdigest()
        return self._hashed_root / f"{digest}.json"

    def _read(self, path: Path) -> Conversation:
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
            return Conversation.from_dict(data)
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.error("store.read_failed", extra={"extra": {"path": path.name, "error": str(e)}})
            raise StorageFailure(code="STORE_READ_ERROR", message=str(e))
