"""远程职位目录适配器。

本模块负责：

1. 接收统一的 JobQuery。
2. 将其转换为职位目录服务的 HTTP 查询参数。
3. 调用 HTTP 接口并处理网络/API 异常（统一包装为 CatalogUnavailable）。
4. 将响应 JSON 解析为 CatalogJob 列表。

目录服务返回的过滤与排序结果按原样使用，这里只再做一次数量截断。
"""

from typing import Any, List

import httpx

from job_assistant.catalog.base import JobQuery, job_from_dict
from job_assistant.domain.exceptions import CatalogUnavailable
from job_assistant.domain.models import CatalogJob
from job_assistant.infrastructure.logging.logger import logger


class HttpJobCatalog:
    """通过 HTTP 访问的职位目录。"""

    name = "http"

    def __init__(self, settings, base_url: str | None = None):
        # Settings 里包含 catalog_url、超时等配置
        self._settings = settings
        self._base_url = (base_url or getattr(settings, "catalog_url", None) or "").rstrip("/")

    def find_jobs(self, query: JobQuery) -> List[CatalogJob]:
        """执行一次职位检索。

        步骤：
        1. 构造查询参数。
        2. 发送请求并捕获网络错误/服务端错误。
        3. 解析响应中的职位记录。
        """

        if not self._base_url:
            raise CatalogUnavailable(code="MISSING_CATALOG_URL", message="catalog_url not set")
        log_ctx = {"catalog": self.name, "limit": query.limit}
        try:
            with httpx.Client(timeout=self._settings.http_timeout, trust_env=False) as client:
                resp = client.get(f"{self._base_url}/jobs/search", params=query.to_params())
        except httpx.RequestError as e:
            # 网络错误：DNS 失败、连接超时等
            logger.error("catalog.network_error", extra={"extra": {**log_ctx, "error": str(e)}})
            raise CatalogUnavailable(code="NETWORK_ERROR", message=str(e))
        if resp.status_code >= 400:
            logger.error("catalog.api_error", extra={"extra": {**log_ctx, "status": resp.status_code}})
            raise CatalogUnavailable(code="API_ERROR", message=resp.text, upstream_status=resp.status_code)
        try:
            jobs = self._parse_jobs(resp.json())
        except (ValueError, KeyError, TypeError) as e:
            # 响应不是 JSON、缺少职位列表或记录字段不合法
            logger.error("catalog.bad_payload", extra={"extra": {**log_ctx, "error": str(e)}})
            raise CatalogUnavailable(code="BAD_PAYLOAD", message=str(e))
        return jobs[: query.limit]

    @staticmethod
    def _parse_jobs(data: Any) -> List[CatalogJob]:
        """解析目录服务响应：既可以是职位列表，也可以是 {"jobs": [...]}。"""

        items = data.get("jobs") if isinstance(data, dict) else data
        if not isinstance(items, list):
            raise ValueError("jobs list missing in catalog response")
        return [job_from_dict(item) for item in items if isinstance(item, dict)]
