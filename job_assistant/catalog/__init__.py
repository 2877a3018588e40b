"""职位目录集成层。

该包下的模块负责：
- 定义目录抽象接口与检索条件 (base)。
- 提供进程内目录实现 (memory)。
- 提供远程 HTTP 目录实现 (http_client)。
"""

from typing import Optional

from job_assistant.config.settings import settings
from job_assistant.catalog.base import JobCatalog, JobQuery, MAX_RESULTS
from job_assistant.catalog.memory import InMemoryJobCatalog
from job_assistant.catalog.http_client import HttpJobCatalog


def create_catalog(name: Optional[str] = None) -> JobCatalog:
    """根据配置创建职位目录：catalog_url 优先，其次 catalog_path，否则为空目录。"""

    catalog_name = (name or "").lower()
    if catalog_name == "http" or (not catalog_name and getattr(settings, "catalog_url", None)):
        return HttpJobCatalog(settings)
    catalog_path = getattr(settings, "catalog_path", None)
    if catalog_path:
        return InMemoryJobCatalog.from_file(catalog_path)
    return InMemoryJobCatalog()


__all__ = [
    "JobCatalog",
    "JobQuery",
    "MAX_RESULTS",
    "InMemoryJobCatalog",
    "HttpJobCatalog",
    "create_catalog",
]
