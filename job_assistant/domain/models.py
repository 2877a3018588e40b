"""对话、职位与回复的统一数据模型。

本模块定义了对话引擎内部共享的标准数据结构：

- Message / AssistantPayload: 一条对话消息；助手消息携带带标签的附加载荷
  （建议按钮 + 职位摘要），用户消息不携带任何元数据。
- Conversation: 以 session_id 标识的会话，包含有序消息与上下文。
- CatalogJob / JobSummary: 职位目录中的原始记录及其对外展示的摘要投影。
- Reply: ResponseComposer 生成的一轮回复。

对外（API / 存储）使用的 JSON 字段名沿用前端约定的 camelCase，
由各模型的 to_dict 负责转换。
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Literal, Optional, Tuple


# 消息角色，仅允许这两种
Role = Literal["user", "assistant"]

Intent = Literal[
    "greeting",
    "job_search",
    "location_query",
    "salary_query",
    "apply_help",
    "profile_help",
    "skills_query",
    "help",
    "thanks",
    "goodbye",
    "fallback",
]

# 上下文中约定的键
HAS_SEARCHED_JOBS = "hasSearchedJobs"
LAST_QUERY = "lastQuery"
LAST_INTENT = "lastIntent"

Context = Dict[str, Any]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    return datetime.fromisoformat(str(raw).replace("Z", "+00:00"))


@dataclass(frozen=True)
class CompanyRef:
    """职位所属公司的精简信息。"""

    name: str
    logo: Optional[str] = None
    location: Optional[str] = None


@dataclass
class CatalogJob:
    """职位目录返回的一条职位记录。

    - salary: 以最小货币单位计的整数。
    - experience_level: 要求的工作年限（年）。
    - created_at: 发布时间，用于“最新优先”排序。
    """

    id: str
    title: str
    description: str
    location: str
    salary: int
    experience_level: int
    job_type: str
    created_at: datetime
    company: Optional[CompanyRef] = None


@dataclass(frozen=True)
class JobSummary:
    """职位摘要，每轮对话按需从 CatalogJob 投影得到，只读。"""

    id: str
    title: str
    company: str
    location: str
    salary: int
    experience_level: int
    job_type: str
    description: str
    company_logo: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "company": self.company,
            "companyLogo": self.company_logo,
            "location": self.location,
            "salary": self.salary,
            "experienceLevel": self.experience_level,
            "jobType": self.job_type,
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "JobSummary":
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            company=data.get("company") or "Company",
            location=data.get("location") or "",
            salary=int(data.get("salary") or 0),
            experience_level=int(data.get("experienceLevel") or 0),
            job_type=data.get("jobType") or "",
            description=data.get("description") or "",
            company_logo=data.get("companyLogo"),
        )


@dataclass(frozen=True)
class AssistantPayload:
    """助手消息的附加载荷（带标签的变体，仅用于 assistant 角色）。"""

    suggestions: Tuple[str, ...] = ()
    jobs: Tuple[JobSummary, ...] = ()
    kind: Literal["assistant"] = "assistant"

    @property
    def jobs_count(self) -> int:
        return len(self.jobs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind,
            "suggestions": list(self.suggestions),
            "jobsCount": self.jobs_count,
            "jobs": [job.to_dict() for job in self.jobs],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AssistantPayload":
        return cls(
            suggestions=tuple(data.get("suggestions") or ()),
            jobs=tuple(JobSummary.from_dict(j) for j in data.get("jobs") or ()),
        )


@dataclass(frozen=True)
class Message:
    """一条已追加到会话中的消息，追加后不可修改。"""

    role: Role
    content: str
    timestamp: datetime = field(default_factory=utcnow)
    metadata: Optional[AssistantPayload] = None

    def __post_init__(self) -> None:
        if self.role not in ("user", "assistant"):
            raise ValueError(f"Unsupported message role: {self.role!r}")
        if self.role == "user" and self.metadata is not None:
            raise ValueError("User messages carry no metadata")

    @classmethod
    def user(cls, content: str, timestamp: Optional[datetime] = None) -> "Message":
        return cls(role="user", content=content, timestamp=timestamp or utcnow())

    @classmethod
    def assistant(
        cls,
        content: str,
        payload: AssistantPayload,
        timestamp: Optional[datetime] = None,
    ) -> "Message":
        return cls(role="assistant", content=content, timestamp=timestamp or utcnow(), metadata=payload)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "role": self.role,
            "content": self.content,
            "timestamp": format_timestamp(self.timestamp),
        }
        if self.metadata is not None:
            data["metadata"] = self.metadata.to_dict()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Message":
        meta_raw = data.get("metadata")
        role = data["role"]
        return cls(
            role=role,
            content=data.get("content") or "",
            timestamp=parse_timestamp(data["timestamp"]),
            metadata=AssistantPayload.from_dict(meta_raw) if role == "assistant" and meta_raw else None,
        )


@dataclass
class Conversation:
    """以 session_id 唯一标识的会话。

    - user_id: 首次带认证信息的轮次写入，之后不再变化。
    - messages: 只追加、按追加顺序排列。
    - context: 跨轮次携带的扁平键值状态。
    """

    session_id: str
    user_id: Optional[str]
    messages: List[Message]
    context: Context
    created_at: datetime
    last_active: datetime

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sessionId": self.session_id,
            "userId": self.user_id,
            "messages": [m.to_dict() for m in self.messages],
            "context": dict(self.context),
            "createdAt": format_timestamp(self.created_at),
            "lastActive": format_timestamp(self.last_active),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Conversation":
        return cls(
            session_id=data["sessionId"],
            user_id=data.get("userId"),
            messages=[Message.from_dict(m) for m in data.get("messages") or []],
            context=data.get("context") or {},
            created_at=parse_timestamp(data["createdAt"]),
            last_active=parse_timestamp(data["lastActive"]),
        )


@dataclass
class Reply:
    """一轮对话的回复：正文、建议按钮和职位摘要列表。"""

    message: str
    suggestions: List[str] = field(default_factory=list)
    jobs: List[JobSummary] = field(default_factory=list)

    def to_payload(self) -> AssistantPayload:
        return AssistantPayload(suggestions=tuple(self.suggestions), jobs=tuple(self.jobs))
