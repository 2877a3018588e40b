"""对外 API 服务模块。

提供与传输层无关的函数接口（发送消息 / 查询历史 / 清空会话），
返回可直接序列化为 JSON 的字典。内部异常统一在此记录日志，
对调用方只返回通用错误信息。
"""

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, ValidationError, field_validator

from job_assistant.catalog import create_catalog
from job_assistant.config.settings import settings
from job_assistant.dialogue.engine import DialogueEngine
from job_assistant.domain.exceptions import InvalidInput
from job_assistant.infrastructure.logging.logger import logger
from job_assistant.infrastructure.storage.json_store import JsonConversationStore


class SendMessageRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: StrictStr = Field(min_length=1)
    session_id: Optional[StrictStr] = Field(default=None, alias="sessionId")

    @field_validator("session_id", mode="before")
    @classmethod
    def _drop_malformed_session_id(cls, v: Any) -> Any:
        # 非字符串的 sessionId 视为未提供，本轮开启新会话
        if v is not None and not isinstance(v, str):
            logger.warning("chat.session_id_ignored", extra={"extra": {"type": type(v).__name__}})
            return None
        return v


class ClearConversationRequest(BaseModel):
    model_config = ConfigDict(extra="ignore")

    session_id: Optional[StrictStr] = Field(default=None, alias="sessionId")


_engine: Optional[DialogueEngine] = None


def get_default_engine() -> DialogueEngine:
    """获取默认的对话引擎实例（单例）。"""
    global _engine
    if _engine is None:
        _engine = DialogueEngine(
            store=JsonConversationStore(root=settings.storage_root),
            catalog=create_catalog(),
        )
    return _engine


def set_default_engine(engine: Optional[DialogueEngine]) -> None:
    """替换默认引擎（测试或自定义装配时使用）。"""
    global _engine
    _engine = engine


def _error(code: str, message: str, status: int) -> Dict[str, Any]:
    return {"success": False, "code": code, "message": message, "status": status}


def send_message(payload: Any, user_id: Optional[str] = None) -> Dict[str, Any]:
    """处理一条用户消息。

    Args:
        payload: {"message": str, "sessionId"?: str}
        user_id: 认证中间件提供的用户ID（可选）

    Returns:
        成功时包含 message / suggestions / jobs / sessionId 的字典
    """
    invalid = _error("INVALID_INPUT", "Please provide a valid message", 400)
    try:
        req = SendMessageRequest.model_validate(payload)
    except ValidationError:
        return invalid

    try:
        result = get_default_engine().handle_message(req.message, session_id=req.session_id, user_id=user_id)
    except InvalidInput:
        return invalid
    except Exception as e:
        logger.error("Chat failed", extra={"extra": {
            "session_id": req.session_id,
            "error": str(e),
        }})
        return _error("INTERNAL_ERROR", "Something went wrong. Please try again.", 500)

    logger.info("chat.turn", extra={"extra": {
        "session_id": result.session_id,
        "intent": result.intent,
        "jobs": len(result.reply.jobs),
        "new_session": result.is_new,
    }})
    return {
        "success": True,
        "message": result.reply.message,
        "suggestions": list(result.reply.suggestions),
        "jobs": [job.to_dict() for job in result.reply.jobs],
        "sessionId": result.session_id,
    }


def get_history(session_id: Optional[str], user_id: Optional[str] = None) -> Dict[str, Any]:
    """获取会话历史；会话不存在时返回空消息列表。"""
    try:
        conv = get_default_engine().history(session_id, user_id)
    except Exception as e:
        logger.error("Get conversation failed", extra={"extra": {"session_id": session_id, "error": str(e)}})
        return _error("INTERNAL_ERROR", "Failed to retrieve conversation history", 500)

    if conv is None:
        return {"success": True, "messages": [], "sessionId": session_id, "context": {}}
    return {
        "success": True,
        "messages": [m.to_dict() for m in conv.messages],
        "sessionId": conv.session_id,
        "context": dict(conv.context),
    }


def clear_conversation(payload: Any = None) -> Dict[str, Any]:
    """清空会话；会话不存在或未提供 sessionId 时同样返回成功。"""
    try:
        req = ClearConversationRequest.model_validate(payload or {})
    except ValidationError:
        req = ClearConversationRequest()
    try:
        get_default_engine().clear(req.session_id)
    except Exception as e:
        logger.error("Clear conversation failed", extra={"extra": {"session_id": req.session_id, "error": str(e)}})
        return _error("INTERNAL_ERROR", "Failed to clear conversation", 500)
    return {"success": True, "message": "Conversation cleared successfully"}
