"""职位目录抽象接口。

对话引擎不直接依赖具体的职位存储，而是依赖此协议：

- JobQuery: 一次职位搜索的检索条件（由 JobQueryBuilder 生成）。
- JobCatalog: 执行检索并返回 CatalogJob 列表的协作者。

过滤语义（所有实现都必须遵守）：
- text: 不区分大小写，在 title / description / location 任一字段中出现即匹配；
  空字符串匹配全部职位。
- location: 不区分大小写的子串匹配。
- min_salary / max_salary: 闭区间。
- experience_level: 只作为上限（要求年限 <= 给定值）。
- 按 created_at 倒序（最新优先），最多返回 limit 条。
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol

from job_assistant.domain.models import CatalogJob, CompanyRef, parse_timestamp

MAX_RESULTS = 5


@dataclass(frozen=True)
class JobQuery:
    text: str = ""
    location: Optional[str] = None
    min_salary: Optional[int] = None
    max_salary: Optional[int] = None
    experience_level: Optional[int] = None
    limit: int = MAX_RESULTS

    def __post_init__(self) -> None:
        if self.limit < 1 or self.limit > MAX_RESULTS:
            object.__setattr__(self, "limit", MAX_RESULTS)

    def to_params(self) -> Dict[str, Any]:
        """转换为远程目录服务使用的查询参数（省略空条件）。"""

        params: Dict[str, Any] = {"q": self.text, "limit": self.limit, "sort": "-createdAt"}
        if self.location:
            params["location"] = self.location
        if self.min_salary is not None:
            params["minSalary"] = self.min_salary
        if self.max_salary is not None:
            params["maxSalary"] = self.max_salary
        if self.experience_level is not None:
            params["experienceLevel"] = self.experience_level
        return params


class JobCatalog(Protocol):
    """职位目录协议。

    实现者在目录不可用时抛出 CatalogUnavailable。
    """

    name: str

    def find_jobs(self, query: JobQuery) -> List[CatalogJob]:
        ...


def job_matches(job: CatalogJob, query: JobQuery) -> bool:
    if query.text:
        needle = query.text.lower()
        fields = (job.title, job.description, job.location)
        if not any(needle in (f or "").lower() for f in fields):
            return False
    if query.location and query.location.lower() not in (job.location or "").lower():
        return False
    if query.min_salary is not None and job.salary < query.min_salary:
        return False
    if query.max_salary is not None and job.salary > query.max_salary:
        return False
    if query.experience_level is not None and job.experience_level > query.experience_level:
        return False
    return True


def job_from_dict(data: Dict[str, Any]) -> CatalogJob:
    """把目录返回的 JSON/YAML 记录解析为 CatalogJob。

    同时接受 camelCase（目录服务约定）与 snake_case 字段名。
    """

    company_raw = data.get("company")
    company: Optional[CompanyRef] = None
    if isinstance(company_raw, dict) and company_raw.get("name"):
        company = CompanyRef(
            name=company_raw["name"],
            logo=company_raw.get("logo"),
            location=company_raw.get("location"),
        )
    elif isinstance(company_raw, str) and company_raw:
        company = CompanyRef(name=company_raw)

    return CatalogJob(
        id=str(data.get("id") or data.get("_id") or ""),
        title=data.get("title") or "",
        description=data.get("description") or "",
        location=data.get("location") or "",
        salary=int(data.get("salary") or 0),
        experience_level=int(_first(data, "experienceLevel", "experience_level") or 0),
        job_type=_first(data, "jobType", "job_type") or "",
        created_at=_as_datetime(_first(data, "createdAt", "created_at")),
        company=company,
    )


def _first(data: Dict[str, Any], *keys: str) -> Any:
    for key in keys:
        if data.get(key) is not None:
            return data[key]
    return None


def _as_datetime(raw: Any) -> datetime:
    if raw is None:
        return datetime.fromtimestamp(0, timezone.utc)
    value = raw if isinstance(raw, datetime) else parse_timestamp(str(raw))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value
